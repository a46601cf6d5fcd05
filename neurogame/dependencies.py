"""FastAPI dependency injection utilities.

Services are built once at startup and stored on ``app.state.services``.
These dependencies hand them to route handlers and turn a missing service
(e.g. no API key configured) into a 503.
"""

import logging

from fastapi import HTTPException, Request, status

from .bootstrap import AppServices
from .services.generation_service import GenerationService
from .services.naming_service import NamingService

logger = logging.getLogger(__name__)


def get_services(request: Request) -> AppServices:
    """
    FastAPI dependency for the process-wide services.

    Raises:
        HTTPException: 503 Service Unavailable if startup did not build them
    """
    services = getattr(request.app.state, "services", None)
    if services is None:
        logger.error("Services not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Services not initialized",
        )
    return services


def get_generation_service(request: Request) -> GenerationService:
    """FastAPI dependency for the generation service (503 if unavailable)."""
    service = get_services(request).generation
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Generation pipeline not available (check provider API keys)",
        )
    return service


def get_naming_service(request: Request) -> NamingService:
    """FastAPI dependency for the naming service (503 if unavailable)."""
    service = get_services(request).naming
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Naming service not available (check provider API keys)",
        )
    return service
