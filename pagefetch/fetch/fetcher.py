import asyncio
import logging
import time
from typing import List, Optional, Union

import httpx

from pagefetch.core.config import settings
from pagefetch.fetch.base import BaseFetcher, FetchResult
from pagefetch.fetch.errors import FetchTimeoutError, NetworkError
from pagefetch.fetch.overflow import OverflowStore
from pagefetch.fetch.reader import read_body, read_limit_for
from pagefetch.fetch.transform import base_content_type, transform
from pagefetch.fetch.truncate import truncate_text, truncation_note
from pagefetch.fetch.urls import normalize_url, validate_http_url
from pagefetch.schemas import FetchRequest, FetchResponse, FetchTruncation

logger = logging.getLogger(__name__)

class HttpFetcher(BaseFetcher):
    """
    Single GET with a hard timeout, bounded body read, content transform,
    output caps and overflow persistence.

    Args:
        store: where untruncated output goes when the caps cut it; without a
            store nothing is written and full_output_path stays unset
        transport: httpx transport override, e.g. httpx.MockTransport in tests
    """

    def __init__(
        self,
        store: Optional[OverflowStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store
        self.transport = transport

    async def fetch(self, request: FetchRequest) -> FetchResponse:
        request_url = normalize_url(request.url)
        url = validate_http_url(request_url)

        timeout = request.timeout_seconds if request.timeout_seconds is not None else settings.FETCH_TIMEOUT_SECONDS
        max_bytes = request.max_bytes or settings.FETCH_MAX_BYTES
        max_lines = request.max_lines or settings.FETCH_MAX_LINES
        limit = read_limit_for(max_bytes)

        logger.info(f"Fetching {request_url} (timeout={timeout}s, read limit={limit} bytes)")

        # wait_for cancels _get on expiry, which closes the response stream
        # and the client's connection pool on the way out
        try:
            result = await asyncio.wait_for(self._get(url, timeout, limit), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timeout after {timeout}s for {request_url}")
            raise FetchTimeoutError(timeout) from None
        except httpx.TimeoutException as e:
            logger.warning(f"Transport timeout after {timeout}s for {request_url}: {e!r}")
            raise FetchTimeoutError(timeout) from e
        except httpx.RequestError as e:
            logger.warning(f"Network error for {request_url}: {e!r}")
            raise NetworkError(f"Fetch failed for {request_url}: {type(e).__name__}: {e}") from e

        logger.info(
            f"Received {result.status_code} from {result.final_url}: "
            f"{result.body.bytes_read} bytes in {result.elapsed_s:.2f}s"
        )
        return await self._build_response(request, request_url, result, max_bytes, max_lines)

    async def _get(self, url: httpx.URL, timeout: Union[int, float], limit: int) -> FetchResult:
        started = time.monotonic()
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": settings.USER_AGENT},
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            async with client.stream("GET", url) as response:
                body = await read_body(response, limit)
                return FetchResult(
                    url=str(url),
                    status_code=response.status_code,
                    final_url=str(response.url),
                    content_type=response.headers.get("content-type"),
                    body=body,
                    elapsed_s=time.monotonic() - started,
                )

    async def _build_response(
        self,
        request: FetchRequest,
        request_url: str,
        result: FetchResult,
        max_bytes: int,
        max_lines: int,
    ) -> FetchResponse:
        content_type = base_content_type(result.content_type)
        # Transform first: truncating raw JSON would leave invalid JSON labelled as json
        method, text = transform(result.body.text, content_type, raw=request.raw)
        cut = truncate_text(text, max_bytes, max_lines)

        notes: List[str] = []
        full_output_path: Optional[str] = None
        truncation: Optional[FetchTruncation] = None

        if cut.truncated:
            save_error: Optional[OSError] = None
            if self.store is not None:
                try:
                    full_output_path = await asyncio.to_thread(self.store.save, text)
                except OSError as e:
                    logger.warning(f"Could not save full output for {request_url}: {e}")
                    save_error = e

            notes.append(truncation_note(cut, full_output_path))
            if save_error is not None:
                notes.append(f"Failed to save full output: {save_error}")

            truncation = FetchTruncation(
                total_lines=cut.total_lines,
                total_bytes=cut.total_bytes,
                output_lines=cut.output_lines,
                output_bytes=cut.output_bytes,
            )

        if result.body.truncated:
            notes.append(
                f"Response body exceeded {result.body.limit} byte read limit; "
                "saved output may be incomplete."
            )

        return FetchResponse(
            request_url=request_url,
            final_url=result.final_url or request_url,
            status=result.status_code,
            content_type=content_type,
            method=method,
            content=cut.content,
            truncated=cut.truncated,
            full_output_path=full_output_path,
            notes=notes,
            truncation=truncation,
        )

async def fetch_url(
    request: FetchRequest,
    store: Optional[OverflowStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FetchResponse:
    """Fetch one URL; see HttpFetcher."""
    return await HttpFetcher(store=store, transport=transport).fetch(request)
