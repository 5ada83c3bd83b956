import json
import logging
from typing import Callable, Dict, Optional, Tuple

from pagefetch.fetch.errors import TransformError
from pagefetch.fetch.html_text import html_to_text
from pagefetch.schemas import ContentMethod

logger = logging.getLogger(__name__)

UNKNOWN_CONTENT_TYPE = "unknown"

def base_content_type(header: Optional[str]) -> str:
    """'Application/JSON; charset=utf-8' -> 'application/json'"""
    if not header or not header.strip():
        return UNKNOWN_CONTENT_TYPE
    return header.split(";", 1)[0].strip().lower() or UNKNOWN_CONTENT_TYPE

def is_json(content_type: str) -> bool:
    return content_type == "application/json" or content_type.endswith("+json")

def is_html(content_type: str) -> bool:
    return content_type in ("text/html", "application/xhtml+xml")

def is_text(content_type: str) -> bool:
    return content_type.startswith("text/") or "markdown" in content_type

def classify(content_type: str, raw: bool = False) -> ContentMethod:
    if raw:
        return ContentMethod.RAW
    if is_json(content_type):
        return ContentMethod.JSON
    if is_html(content_type):
        return ContentMethod.HTML
    if is_text(content_type):
        return ContentMethod.TEXT
    return ContentMethod.FALLBACK

def parse_json(text: str) -> str:
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except (ValueError, RecursionError) as e:
        raise TransformError(f"Invalid JSON: {e}") from e

def format_json(text: str) -> str:
    """Pretty-print JSON with 2-space indentation; invalid JSON is returned as is."""
    try:
        return parse_json(text)
    except TransformError as e:
        logger.debug(f"{e}, keeping body as text")
        return text

def passthrough(text: str) -> str:
    return text

TRANSFORMS: Dict[ContentMethod, Callable[[str], str]] = {
    ContentMethod.JSON: format_json,
    ContentMethod.HTML: html_to_text,
    ContentMethod.TEXT: passthrough,
    ContentMethod.RAW: passthrough,
    ContentMethod.FALLBACK: passthrough,
}

def transform(body: str, content_type: str, raw: bool = False) -> Tuple[ContentMethod, str]:
    method = classify(content_type, raw)
    return method, TRANSFORMS[method](body)
