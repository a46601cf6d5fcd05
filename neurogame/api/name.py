"""Game naming endpoint."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ..dependencies import get_naming_service
from ..errors import ProviderError, RequestValidationError
from ..services.validation import extract_task
from ._body import read_json_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["name"])


@router.post("/name")
async def name_game(request: Request):
    """Return ``{"name": ...}`` for ``{"prompt": "..."}``."""
    try:
        task = extract_task(await read_json_body(request))
    except RequestValidationError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})

    service = get_naming_service(request)
    try:
        name = await service.name(task)
    except ProviderError as e:
        logger.error(f"Error naming game: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Error processing request"},
        )

    return {"name": name}
