"""Main FastAPI application module for Gemini Relay.

This module initializes the FastAPI application and sets up the core routes,
middleware and error handling.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gemini_relay.api.models import ErrorResponse
from gemini_relay.api.routers import gemini as gemini_router
from gemini_relay.core import dependencies as core_deps
from gemini_relay.core.config import Settings, get_settings, require_api_key
from gemini_relay.core.errors import RelayError
from gemini_relay.core.logging_config import build_logging_config, configure_logging

# Configure logging at import so `uvicorn gemini_relay.main:app` gets the same output as run()
configure_logging(get_settings().api_log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Gemini Relay API...")

    # A missing API key is fatal: raising here stops the server before it serves anything
    settings = get_settings()
    require_api_key(settings)
    logger.info(f"Settings loaded. Using Gemini model '{settings.GEMINI_MODEL}'.")

    yield

    # Shutdown
    logger.info("Shutting down Gemini Relay API...")
    try:
        await core_deps.close_llm_service()
    except Exception as e:
        logger.error(f"Error closing Gemini client: {e}", exc_info=True)
    logger.info("Shutdown complete.")


# Create FastAPI app
app = FastAPI(
    title="Gemini Relay API",
    description="Relays a prompt to Gemini and returns a friendlier, reformatted answer.",
    version="0.1.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Renders a RelayError as `{"message": ..., "error": ...}` with the status for its kind."""
    if exc.status_code >= 500:
        logger.error(f"{exc.kind.value} error on {request.url.path}: {exc}")
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc.message}")
    body = ErrorResponse(message=exc.message, error=exc.error)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


# Include API routers
app.include_router(gemini_router.router)


@app.get("/health", response_model=Dict[str, Any])
async def health_check(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Health check endpoint to verify the API is running.

    Returns:
        Dict[str, Any]: Health status information
    """
    return {
        "status": "healthy",
        "version": app.version,
        "environment": settings.environment,
        "model": settings.GEMINI_MODEL,
    }


@app.get("/")
async def root() -> Dict[str, str]:
    """Root endpoint that returns basic API information."""
    return {
        "message": "Welcome to Gemini Relay API",
        "version": app.version,
    }


def run():
    """Starts the uvicorn server, refusing to start without a Gemini API key."""
    settings = get_settings()
    log_config = build_logging_config(settings.api_log_level)

    try:
        require_api_key(settings)
    except RelayError as e:
        logger.critical(f"Refusing to start: {e.message}")
        raise SystemExit(1) from e

    logger.info(f"Starting Uvicorn server on {settings.api_host}:{settings.api_port} with reload={settings.api_reload}")
    uvicorn.run(
        "gemini_relay.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_config=log_config,
        log_level=settings.api_log_level.lower()
    )


if __name__ == "__main__":
    run()
