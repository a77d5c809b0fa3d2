"""FastAPI application for the swap router."""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from swapper.api.endpoints import router
from swapper.errors import ConfigurationError, NoRouteError, SwapperError, UpstreamError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SWAPPER_HOST", "0.0.0.0")
PORT = int(os.environ.get("SWAPPER_PORT", "8000"))
DEBUG = os.environ.get("SWAPPER_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="Swapper",
    description="Multi-hop swap routing and quoting",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(router)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def status_for(error: SwapperError) -> int:
    """HTTP status for an engine error."""
    if isinstance(error, ConfigurationError):
        return 400
    if isinstance(error, NoRouteError):
        return 404
    if isinstance(error, UpstreamError):
        return 502
    return 500


@app.exception_handler(SwapperError)
async def swapper_error_handler(_request: Request, exc: SwapperError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.warning if status_code < 500 else logger.error
    log("quote_failed", error_type=type(exc).__name__, error=str(exc), status_code=status_code)
    return _error(status_code, str(exc))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    missing = sorted({str(error["loc"][-1]) for error in exc.errors()})
    return _error(400, f"Missing or invalid parameters: {', '.join(missing)}")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - SWAPPER_HOST: Host to bind to (default: 0.0.0.0)
    - SWAPPER_PORT: Port to bind to (default: 8000)
    - SWAPPER_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "swapper.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
