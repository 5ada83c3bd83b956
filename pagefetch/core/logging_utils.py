import logging
import sys
from typing import Optional

from pagefetch.core.config import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # httpx logs every request at INFO; the fetcher already does
    logging.getLogger("httpx").setLevel(logging.WARNING)
