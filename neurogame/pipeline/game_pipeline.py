"""Game generation pipeline orchestration."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..providers.registry import ProviderRegistry
from .base import Pipeline
from .executor import PipelineExecutor, ProgressObserver, log_progress
from .registry import STAGES, StageDefinition, validate_stage_order
from .result import PipelineResult, assemble_result
from .stages.cognitive import CognitiveStage

logger = logging.getLogger(__name__)


def build_pipeline(
    stages: Iterable[StageDefinition], providers: ProviderRegistry
) -> Pipeline:
    """
    Bind every stage definition to its provider instance.

    Raises:
        RegistryError: If the stage table is not a valid order
        ValueError: If a stage's provider is not loaded
    """
    stages = validate_stage_order(stages)
    labels = {stage.id: stage.label for stage in stages}
    return Pipeline(
        [
            CognitiveStage(stage, providers.require(stage.provider.value), labels)
            for stage in stages
        ]
    )


class GamePipeline:
    """
    Game generation pipeline that runs the nine cognitive stages.

    Pipeline flow:
    1. Perception   (restructure the request into a game concept)
    2. Attention    (prioritize the critical elements)
    3. Memory       (recall relevant knowledge and examples)
    4. Emotion      (assess engagement potential)
    5. Context      (narrative and wider context)
    6. Planning     (several implementation strategies)
    7. World Model  (feasibility of the plan only)
    8. Decision     (choose and justify one plan)
    9. Action       (the finished HTML document)
    """

    def __init__(
        self,
        providers: ProviderRegistry,
        stages: Iterable[StageDefinition] = STAGES,
        observer: Optional[ProgressObserver] = log_progress,
    ):
        self.stages = tuple(stages)
        self.pipeline = build_pipeline(self.stages, providers)
        self.executor = PipelineExecutor(self.pipeline, observer=observer)
        self.terminal_stage_id = self.stages[-1].id

    async def run(
        self,
        task: str,
        run_id: Optional[str] = None,
        observer: Optional[ProgressObserver] = None,
    ) -> PipelineResult:
        """
        Run the complete pipeline for one task.

        Args:
            task: Validated, non-empty request text
            run_id: Optional identifier for logs
            observer: Optional per-run progress observer

        Returns:
            PipelineResult with the HTML document or the failure description
        """
        started = datetime.now(timezone.utc)
        state = await self.executor.run(task, run_id=run_id, observer=observer)
        result = assemble_result(state, self.terminal_stage_id)

        elapsed = (datetime.now(timezone.utc) - started).total_seconds()
        if result.succeeded:
            logger.info(
                f"[{result.run_id}] Generated {len(result.html)} characters in {elapsed:.1f}s"
            )
        else:
            logger.error(
                f"[{result.run_id}] Pipeline failed at {result.failed_stage} after {elapsed:.1f}s"
            )
        return result

    def describe(self) -> List[Dict[str, Any]]:
        """Stage table as plain dicts (for the API and CLI)."""
        return [
            {
                "id": stage.id,
                "label": stage.label,
                "requires": list(stage.requires),
                "provider": stage.provider.value,
                "model": stage.model,
                "max_output_tokens": stage.max_output_tokens,
            }
            for stage in self.stages
        ]
