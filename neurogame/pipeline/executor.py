"""Pipeline executor: runs stages in order and stops at the first failure.

A run moves through ``idle -> running(i) -> succeeded | failed``. Each
transition is an explicit method on ``RunState``; the executor never
retries a stage and never continues past a failed one.
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..errors import PipelineError, UnexpectedError
from .base import Pipeline
from .context import PipelineContext

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RunState:
    """Transient state of one run. Owned by a single executor invocation."""

    task: str
    context: PipelineContext
    run_id: str
    status: RunStatus = RunStatus.IDLE
    stage_index: Optional[int] = None
    error: Optional[PipelineError] = None

    def start(self) -> None:
        self._expect(RunStatus.IDLE)
        self.status = RunStatus.RUNNING
        self.stage_index = 0

    def advance(self, context: PipelineContext) -> None:
        """Record the context produced by the current stage and move to the next one."""
        self._expect(RunStatus.RUNNING)
        self.context = context
        self.stage_index += 1

    def fail(self, error: PipelineError) -> None:
        self._expect(RunStatus.RUNNING)
        self.status = RunStatus.FAILED
        self.error = error

    def succeed(self) -> None:
        self._expect(RunStatus.RUNNING)
        self.status = RunStatus.SUCCEEDED

    def _expect(self, status: RunStatus) -> None:
        if self.status is not status:
            raise RuntimeError(
                f"run {self.run_id}: invalid transition from {self.status.value} (expected {status.value})"
            )


@dataclass(frozen=True)
class StageProgress:
    run_id: str
    stage_id: str
    index: int
    total: int


ProgressObserver = Callable[[StageProgress], None]


def log_progress(progress: StageProgress) -> None:
    logger.info(
        f"✅ [{progress.run_id}] {progress.stage_id} complete ({progress.index}/{progress.total})"
    )


class PipelineExecutor:
    """Executes a ``Pipeline`` for one task at a time per call.

    The executor holds no per-run state, so one instance can serve any
    number of concurrent runs.
    """

    def __init__(
        self,
        pipeline: Pipeline,
        observer: Optional[ProgressObserver] = log_progress,
    ):
        self.pipeline = pipeline
        self.observer = observer

    async def run(
        self,
        task: str,
        run_id: Optional[str] = None,
        observer: Optional[ProgressObserver] = None,
    ) -> RunState:
        """
        Run every stage in order.

        Args:
            task: The request text, already validated
            run_id: Identifier for logs (generated when omitted)
            observer: Per-run progress observer, in addition to the executor's

        Returns:
            RunState in ``succeeded`` or ``failed`` status
        """
        run_id = run_id or uuid.uuid4().hex[:8]
        state = RunState(
            task=task,
            context=PipelineContext.for_task(task, run_id=run_id),
            run_id=run_id,
        )
        total = len(self.pipeline)

        logger.info(f"🚀 [{run_id}] Starting pipeline with {total} stages")
        state.start()

        for stage in self.pipeline.stages:
            try:
                context = await stage.execute(state.context)
            except PipelineError as e:
                state.fail(e)
            except Exception as e:
                state.fail(UnexpectedError(stage.name, e))

            if state.status is RunStatus.FAILED:
                logger.error(f"❌ [{run_id}] {state.error}")
                return state

            state.advance(context)
            self._notify(
                StageProgress(
                    run_id=run_id,
                    stage_id=stage.name,
                    index=state.stage_index,
                    total=total,
                ),
                observer,
            )

        state.succeed()
        logger.info(f"🏁 [{run_id}] Pipeline complete")
        return state

    def _notify(
        self, progress: StageProgress, observer: Optional[ProgressObserver]
    ) -> None:
        # Progress is advisory: a failing observer never changes the run.
        for callback in (self.observer, observer):
            if callback is None:
                continue
            try:
                callback(progress)
            except Exception as e:
                logger.warning(f"Progress observer failed for {progress.stage_id}: {e}")
