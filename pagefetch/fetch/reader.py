import logging
from dataclasses import dataclass

import httpx

from pagefetch.fetch.truncate import utf8_boundary

logger = logging.getLogger(__name__)

# Floor for the read limit so small output caps still leave enough body
# to parse (e.g. a JSON document) before truncating the transformed text.
MIN_BODY_READ_BYTES = 256 * 1024

@dataclass(frozen=True)
class BodyRead:
    text: str
    bytes_read: int
    truncated: bool
    limit: int

def read_limit_for(max_bytes: int) -> int:
    return max(max_bytes, MIN_BODY_READ_BYTES)

async def read_body(response: httpx.Response, limit: int) -> BodyRead:
    """
    Read a streamed response body, stopping once more than `limit` bytes arrive.
    The kept bytes end on a UTF-8 codepoint boundary and are decoded as UTF-8.
    """
    buffer = bytearray()
    truncated = False

    async for chunk in response.aiter_bytes():
        buffer.extend(chunk)
        if len(buffer) > limit:
            truncated = True
            break

    data = bytes(buffer)
    if truncated:
        data = data[:utf8_boundary(data, limit)]
        logger.warning(f"Body of {response.url} exceeded {limit} byte read limit, stopped reading")

    return BodyRead(
        text=data.decode("utf-8", errors="replace"),
        bytes_read=len(data),
        truncated=truncated,
        limit=limit,
    )
