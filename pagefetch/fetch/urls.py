import httpx

from pagefetch.fetch.errors import ValidationError

ALLOWED_SCHEMES = ("http", "https")

def normalize_url(url: str) -> str:
    """
    Trim user input and make it scheme-qualified.
    Examples: 'example.com/path' -> 'https://example.com/path', 'http://x' -> 'http://x'
    """
    trimmed = (url or "").strip()
    if not trimmed:
        raise ValidationError("URL must not be empty")

    if "://" in trimmed:
        return trimmed

    return f"https://{trimmed}"

def validate_http_url(url: str) -> httpx.URL:
    """Parse a normalized URL and reject anything that is not http(s)."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid URL: {url} ({e})") from e

    if not parsed.scheme:
        raise ValidationError(f"Invalid URL: {url}")

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValidationError(
            f"Only HTTP(S) URLs are supported. Received scheme: {parsed.scheme}"
        )

    if not parsed.host:
        raise ValidationError(f"Invalid URL: {url}")

    return parsed
