import httpx
import pytest
from pagefetch.core import config
from pagefetch.fetch.overflow import OverflowStore

@pytest.fixture(autouse=True)
def setup_test_environment(tmp_path):
    """Point overflow files at a per-test directory"""
    original_overflow_dir = config.settings.OVERFLOW_DIR
    config.settings.OVERFLOW_DIR = str(tmp_path / "overflow")

    yield

    config.settings.OVERFLOW_DIR = original_overflow_dir

@pytest.fixture
def store(tmp_path):
    """Overflow store that is always cleaned up after the test"""
    overflow_store = OverflowStore(base_dir=str(tmp_path / "overflow"))
    yield overflow_store
    overflow_store.cleanup()

@pytest.fixture
def respond():
    """Factory for a MockTransport that answers every request with the same body"""
    def make(body, content_type="text/plain", status_code=200):
        content = body.encode("utf-8") if isinstance(body, str) else body
        headers = {"content-type": content_type} if content_type else {}

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, content=content, headers=headers)

        return httpx.MockTransport(handler)

    return make
