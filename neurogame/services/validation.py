"""Boundary validation of inbound requests."""

from typing import Any, Mapping

from ..errors import RequestValidationError

TASK_FIELDS = ("prompt", "task")


def validate_task(value: Any) -> str:
    """
    Return the task if it is a non-empty string.

    Whitespace-only strings count as empty. The task itself is returned
    unchanged.

    Raises:
        RequestValidationError: If the task is missing, not a string or empty
    """
    if not isinstance(value, str) or not value.strip():
        raise RequestValidationError("Prompt is required")
    return value


def extract_task(payload: Any) -> str:
    """
    Pull the task out of a decoded JSON body (``prompt``, or ``task`` as an alias).

    Raises:
        RequestValidationError: If the body is not an object or has no valid task
    """
    if not isinstance(payload, Mapping):
        raise RequestValidationError("Request body must be a JSON object")

    for field in TASK_FIELDS:
        if payload.get(field) is not None:
            return validate_task(payload[field])
    return validate_task(None)
