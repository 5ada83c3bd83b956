"""
Output caps applied to transformed text.

Both caps work on the UTF-8 encoding so byte counts match what a caller
writes to disk or a socket. The byte cap is applied first and always lands on
a codepoint boundary; the line cap then trims whole lines from what is left.
"""

from dataclasses import dataclass
from typing import Optional


def utf8_boundary(data: bytes, limit: int) -> int:
    """
    Largest cut position <= limit that does not split a UTF-8 sequence.
    Continuation bytes look like 0b10xxxxxx; a cut must not land before one.
    """
    if limit >= len(data):
        return len(data)
    cut = max(limit, 0)
    # A codepoint is at most 4 bytes, so at most 3 continuation bytes to skip
    steps = 0
    while cut > 0 and steps < 3 and (data[cut] & 0xC0) == 0x80:
        cut -= 1
        steps += 1
    return cut


def count_lines(text: str) -> int:
    if not text:
        return 0
    return text.count("\n") + 1


@dataclass(frozen=True)
class Truncation:
    content: str
    truncated: bool
    total_lines: int
    total_bytes: int
    output_lines: int
    output_bytes: int


def truncate_text(text: str, max_bytes: int, max_lines: int) -> Truncation:
    encoded = text.encode("utf-8", errors="replace")
    total_bytes = len(encoded)

    capped = encoded[:utf8_boundary(encoded, max_bytes)]

    # Keep everything before the max_lines-th newline
    end = -1
    for _ in range(max_lines):
        end = capped.find(b"\n", end + 1)
        if end == -1:
            break
    if end != -1:
        capped = capped[:end]

    content = capped.decode("utf-8")
    return Truncation(
        content=content,
        truncated=len(capped) < total_bytes,
        total_lines=count_lines(text),
        total_bytes=total_bytes,
        output_lines=count_lines(content),
        output_bytes=len(capped),
    )


def truncation_note(result: Truncation, full_output_path: Optional[str] = None) -> str:
    note = (
        f"Output truncated: showing {result.output_lines} of {result.total_lines} lines "
        f"({result.output_bytes} of {result.total_bytes} bytes)."
    )
    if full_output_path:
        note += f" Full output saved to: {full_output_path}"
    return note
