"""FastAPI application and endpoints."""
import asyncio
import logging
from fastapi import FastAPI, HTTPException, Depends, Query, Request
from fastapi.responses import JSONResponse

from fasttld.config import settings
from fasttld.errors import RefreshFailedError, RefreshNotSupportedError
from fasttld.extractor import FastTLD
from fasttld.models import ExtractRequest
from fasttld.api.schemas import ErrorResponse, ExtractRequestBody, ExtractResponse, RefreshResponse
from fasttld.worker.refresh import RefreshScheduler

from fasttld.utils.logging import setup_logging

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="fasttld",
    description="Subdomain, domain and public suffix extraction service",
    version="0.4.1"
)


@app.on_event("startup")
async def startup_event():
    """Build the suffix trie and start the refresh scheduler."""
    logger.info("Starting fasttld API service")
    settings.ensure_directories()
    app.state.extractor = await asyncio.to_thread(FastTLD)
    app.state.scheduler = RefreshScheduler(app.state.extractor)
    app.state.scheduler_task = asyncio.create_task(app.state.scheduler.run())
    logger.info(f"Suffix trie ready from {app.state.extractor.source_path}")


@app.on_event("shutdown")
async def shutdown_event():
    """Stop the refresh scheduler."""
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler:
        scheduler.stop()
        app.state.scheduler_task.cancel()


def get_extractor(request: Request) -> FastTLD:
    """Extractor built at startup."""
    extractor = getattr(request.app.state, "extractor", None)
    if extractor is None:
        raise HTTPException(status_code=503, detail="Suffix trie not loaded")
    return extractor


@app.get("/healthz")
async def health_check(extractor: FastTLD = Depends(get_extractor)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "source": str(extractor.source_path),
        "managed_source": extractor.is_managed,
        "include_private_suffixes": extractor.include_private_suffixes,
        "top_level_suffixes": len(extractor.trie.children)
    }


@app.get("/v1/extract", response_model=ExtractResponse)
async def extract_query(
    url: str = Query(..., min_length=1, description="URL or hostname to split"),
    punycode: bool = False,
    ignore_subdomains: bool = False,
    extractor: FastTLD = Depends(get_extractor)
):
    """Extract URL components from a query string."""
    result = extractor.extract(url, convert_to_punycode=punycode, ignore_subdomains=ignore_subdomains)
    return ExtractResponse.model_validate(result)


@app.post("/v1/extract", response_model=ExtractResponse)
async def extract_body(body: ExtractRequestBody, extractor: FastTLD = Depends(get_extractor)):
    """Extract URL components from a JSON body."""
    result = extractor.extract_request(
        ExtractRequest(
            url=body.url,
            convert_to_punycode=body.convert_to_punycode,
            ignore_subdomains=body.ignore_subdomains
        )
    )
    return ExtractResponse.model_validate(result)


@app.post("/v1/refresh", response_model=RefreshResponse)
async def refresh_suffix_list(extractor: FastTLD = Depends(get_extractor)):
    """
    Re-download the Public Suffix List and swap in a new trie.

    Returns:
        400 for custom suffix lists, 502 when every mirror fails
    """
    try:
        await asyncio.to_thread(extractor.refresh)
    except RefreshNotSupportedError as e:
        logger.warning(f"Refresh rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except RefreshFailedError as e:
        logger.error(f"Refresh failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return RefreshResponse(status="refreshed", source=str(extractor.source_path))


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error", detail=str(exc)).model_dump()
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fasttld.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False
    )
