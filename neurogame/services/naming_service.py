"""Naming service: one-shot title for a game request, independent of the pipeline."""

import logging
from typing import Any

from ..model_config import NamingSettings
from ..providers.registry import ProviderRegistry
from .validation import validate_task

logger = logging.getLogger(__name__)

NAMING_ROLE = (
    "Your goal is to name the game the user is requesting. "
    "Only output the name, nothing else."
)


class NamingService:
    """Titles a game request with a single model call."""

    def __init__(self, providers: ProviderRegistry, settings: NamingSettings | None = None):
        self.settings = settings or NamingSettings()
        self.provider = providers.require(self.settings.provider)

    async def name(self, task: Any) -> str:
        """
        Return a short name for the requested game.

        Raises:
            RequestValidationError: If the task is missing or empty
            ProviderError: If the model call fails
        """
        task = validate_task(task)
        name = await self.provider.invoke(NAMING_ROLE, task, self.settings.model)
        logger.info(f"Named game: {name!r}")
        return name
