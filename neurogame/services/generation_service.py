"""Generation service: validates the task and runs the game pipeline."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..pipeline.executor import ProgressObserver, log_progress
from ..pipeline.game_pipeline import GamePipeline
from ..pipeline.registry import STAGES, StageDefinition
from ..pipeline.result import PipelineResult
from ..providers.registry import ProviderRegistry
from .validation import validate_task

logger = logging.getLogger(__name__)


class GenerationService:
    """
    Service class for game generation.

    Bridges API routes and the CLI with the pipeline:
    - Task validation (before any stage runs)
    - One shared GamePipeline built from process-wide provider instances
    - An isolated run state per call, so concurrent calls never share artifacts
    """

    def __init__(
        self,
        providers: ProviderRegistry,
        stages: Iterable[StageDefinition] = STAGES,
        observer: Optional[ProgressObserver] = log_progress,
    ):
        self.pipeline = GamePipeline(providers, stages=stages, observer=observer)

    async def generate(
        self,
        task: Any,
        observer: Optional[ProgressObserver] = None,
    ) -> PipelineResult:
        """
        Generate a game for a task.

        Args:
            task: Raw task value from the caller
            observer: Optional per-run progress observer

        Returns:
            PipelineResult (``html`` on success, ``error``/``failed_stage`` on failure)

        Raises:
            RequestValidationError: If the task is missing or empty; no stage runs
        """
        task = validate_task(task)
        logger.info(f"Starting generation for task ({len(task)} chars)")
        return await self.pipeline.run(task, observer=observer)

    def describe_stages(self) -> List[Dict[str, Any]]:
        return self.pipeline.describe()
