"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handling, and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from case_counsel.api.assistant import router as assistant_router
from case_counsel.gateway.client import GatewayError, close_gateway_client
from case_counsel.models.schemas import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting case-counsel API...")
    yield
    await close_gateway_client()
    logger.info("Shutting down case-counsel API...")


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render gateway failures as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Case Counsel API",
        description=(
            "Legal assistant proxy. Streams conversational answers and produces "
            "structured case analyses through an OpenAI-compatible AI gateway."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(GatewayError, gateway_error_handler)
    application.include_router(assistant_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "case-counsel"}

    return application


app = create_app()
