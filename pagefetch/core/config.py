import os
from typing import Optional, Union

def _number(value: str) -> Union[int, float]:
    """Parse '20' as 20 and '0.5' as 0.5 so timeouts echo back as configured."""
    try:
        return int(value)
    except ValueError:
        return float(value)

class Settings:
    # Fetch defaults
    FETCH_TIMEOUT_SECONDS: Union[int, float] = _number(os.getenv("FETCH_TIMEOUT_SECONDS", "20"))
    FETCH_MAX_BYTES: int = int(os.getenv("FETCH_MAX_BYTES", str(50 * 1024)))
    FETCH_MAX_LINES: int = int(os.getenv("FETCH_MAX_LINES", "2000"))

    # Outgoing requests
    USER_AGENT: str = os.getenv("USER_AGENT", "pagefetch/1.0")

    # Overflow files; None means the system temp directory
    OVERFLOW_DIR: Optional[str] = os.getenv("OVERFLOW_DIR") or None

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
