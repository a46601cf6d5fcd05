"""Game generation endpoints."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..dependencies import get_generation_service
from ..errors import RequestValidationError
from ..services.generation_service import GenerationService
from ..services.validation import extract_task
from ._body import read_json_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generate"])


class StageInfo(BaseModel):
    """One row of the stage table."""

    id: str
    label: str = Field(description="Label used when this stage's output appears in a prompt")
    requires: List[str] = Field(description="Stage ids whose outputs this stage reads")
    provider: str
    model: str
    max_output_tokens: Optional[int] = None


@router.post("/generate")
async def generate_game(request: Request):
    """
    Run the nine-stage pipeline for ``{"prompt": "..."}``.

    Returns ``{"html": ...}`` on success. Errors:
    - 400 ``{"error": ...}`` for a bad request, checked before availability
    - 503 ``{"error": ...}`` when the pipeline is not configured
    - 500 ``{"error": ..., "stage": ...}`` when a stage fails
    """
    try:
        task = extract_task(await read_json_body(request))
    except RequestValidationError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})

    service = get_generation_service(request)
    result = await service.generate(task)

    if not result.succeeded:
        logger.error(f"Error in generate route: {result.error}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=result.to_dict(),
        )

    return result.to_dict()


@router.get("/stages", response_model=List[StageInfo])
async def list_stages(
    service: GenerationService = Depends(get_generation_service),
) -> List[Dict[str, Any]]:
    """Stage table: id, label, requires, provider and model of each stage."""
    return service.describe_stages()
