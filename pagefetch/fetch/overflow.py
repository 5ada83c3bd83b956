import logging
import os
import tempfile
import threading
from contextlib import suppress
from typing import List, Optional, Set

logger = logging.getLogger(__name__)

OVERFLOW_PREFIX = "pagefetch-"
OVERFLOW_FILENAME = "output.txt"

class OverflowStore:
    """
    Temporary files holding full, untruncated fetch output.

    Each save gets its own mkdtemp directory, so concurrent fetches never
    collide on file names. The lock only guards the registry set; file I/O
    happens outside it. Whoever owns the process lifetime calls cleanup().
    """

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = base_dir
        self._paths: Set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)

    def paths(self) -> List[str]:
        with self._lock:
            return sorted(self._paths)

    def save(self, text: str) -> str:
        """Write text to a new overflow file and register it. Raises OSError on failure."""
        if self.base_dir:
            os.makedirs(self.base_dir, exist_ok=True)
        directory = tempfile.mkdtemp(prefix=OVERFLOW_PREFIX, dir=self.base_dir)
        path = os.path.join(directory, OVERFLOW_FILENAME)
        try:
            # newline="" keeps the text byte-for-byte on every platform
            with open(path, "w", encoding="utf-8", errors="replace", newline="") as f:
                f.write(text)
        except OSError:
            with suppress(OSError):
                os.rmdir(directory)
            raise

        with self._lock:
            self._paths.add(path)
        logger.info(f"Saved full output to {path}")
        return path

    def cleanup(self) -> int:
        """Delete every registered file and its directory. Safe to call repeatedly."""
        with self._lock:
            paths = list(self._paths)
            self._paths.clear()

        removed = 0
        for path in paths:
            try:
                os.remove(path)
                removed += 1
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Could not remove overflow file {path}: {e}")
                continue
            # Only succeeds once the directory is empty
            with suppress(OSError):
                os.rmdir(os.path.dirname(path))

        if paths:
            logger.info(f"Removed {removed} overflow file(s)")
        return removed
