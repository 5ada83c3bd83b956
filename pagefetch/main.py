import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from pagefetch.api.routes import router
from pagefetch.core.config import settings
from pagefetch.core.logging_utils import setup_logging
from pagefetch.fetch.overflow import OverflowStore

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    The overflow store lives exactly as long as the app; its files go at shutdown.
    """
    setup_logging()
    app.state.overflow_store = OverflowStore(base_dir=settings.OVERFLOW_DIR)
    logger.info("pagefetch started")

    yield

    removed = app.state.overflow_store.cleanup()
    logger.info(f"pagefetch stopped, removed {removed} overflow file(s)")

app = FastAPI(
    title="pagefetch",
    description="Bounded HTTP fetch with content normalization and overflow files",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router)

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "pagefetch",
        "version": "1.0.0",
        "endpoints": {
            "fetch": "POST /fetch",
            "overflow": "GET /overflow",
            "overflow_cleanup": "DELETE /overflow",
            "health": "GET /health"
        }
    }
