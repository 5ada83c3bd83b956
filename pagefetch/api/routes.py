from fastapi import APIRouter, HTTPException, Request, status
from pagefetch.fetch import errors
from pagefetch.fetch.fetcher import HttpFetcher
from pagefetch.fetch.overflow import OverflowStore
from pagefetch.schemas import FetchRequest, FetchResponse

router = APIRouter()

def get_overflow_store(request: Request) -> OverflowStore:
    return request.app.state.overflow_store

@router.post("/fetch", response_model=FetchResponse, response_model_exclude_none=True)
async def fetch(payload: FetchRequest, request: Request):
    """
    Fetch a URL and return its normalized, size-capped content.

    Upstream 4xx/5xx responses are returned as data. Only URL validation,
    timeouts and connection failures produce error responses.
    """
    fetcher = HttpFetcher(store=get_overflow_store(request))
    try:
        return await fetcher.fetch(payload)
    except errors.ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except errors.FetchTimeoutError as e:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e))
    except errors.NetworkError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

@router.get("/overflow")
async def overflow_files(request: Request):
    """List overflow files saved by this process"""
    paths = get_overflow_store(request).paths()
    return {"count": len(paths), "paths": paths}

@router.delete("/overflow")
async def cleanup_overflow(request: Request):
    """Delete all overflow files"""
    removed = get_overflow_store(request).cleanup()
    return {"removed": removed}

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "pagefetch"}
