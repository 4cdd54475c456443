"""FastAPI application exposing pool identity and price math."""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dynswap import __version__
from dynswap.api.endpoints import router
from dynswap.errors import DynSwapError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("DYNSWAP_HOST", "0.0.0.0")
PORT = int(os.environ.get("DYNSWAP_PORT", "8000"))
DEBUG = os.environ.get("DYNSWAP_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="DynamicSwap pool tools",
    description="Pool keys, pool ids, and price/tick/fee conversions for dynamic-fee pools",
    version=__version__,
)


@app.exception_handler(DynSwapError)
async def dynswap_error_handler(request: Request, exc: DynSwapError) -> JSONResponse:
    """Rejected input is a client error, not a server failure."""
    logger.info(
        "request_rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - DYNSWAP_HOST: Host to bind to (default: 0.0.0.0)
    - DYNSWAP_PORT: Port to bind to (default: 8000)
    - DYNSWAP_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "dynswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
