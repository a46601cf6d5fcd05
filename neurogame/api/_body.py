"""Request body parsing shared by the routers."""

import json
from typing import Any

from fastapi import Request

from ..errors import RequestValidationError


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body as JSON.

    Raises:
        RequestValidationError: If the body is not valid JSON
    """
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RequestValidationError("Invalid JSON in request body") from None
