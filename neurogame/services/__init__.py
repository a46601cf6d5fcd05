"""Service layer between the HTTP/CLI surfaces and the pipeline."""

from .generation_service import GenerationService
from .naming_service import NamingService
from .validation import extract_task, validate_task

__all__ = [
    "GenerationService",
    "NamingService",
    "extract_task",
    "validate_task",
]
