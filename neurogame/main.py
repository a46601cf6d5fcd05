"""FastAPI backend for the game generation pipeline."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import generate, name
from .bootstrap import AppServices, build_services
from .config import configure_logging, get_cors_origins

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build providers and services once at startup; close them on shutdown."""
    owns_services = getattr(app.state, "services", None) is None
    if owns_services:
        configure_logging()
        app.state.services = build_services()
        logger.info("✓ Services initialized")

    yield

    if owns_services:
        await app.state.services.aclose()
        app.state.services = None
        logger.info("✓ Services closed")


def create_app(services: Optional[AppServices] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        services: Pre-built services (tests pass fakes); built at startup when omitted
    """
    app = FastAPI(title="Neurogame API", version=__version__, lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Report service errors in the same ``{"error": ...}`` shape as the routes."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )

    app.include_router(generate.router)
    app.include_router(name.router)

    @app.get("/")
    async def root():
        """Health check."""
        current = app.state.services
        return {
            "status": "ok",
            "service": "neurogame",
            "generation_available": bool(current and current.generation),
            "naming_available": bool(current and current.naming),
        }

    return app


app = create_app()
