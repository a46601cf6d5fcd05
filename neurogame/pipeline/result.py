"""Result assembly: the terminal artifact, or a single error description."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .executor import RunState, RunStatus


@dataclass(frozen=True)
class PipelineResult:
    run_id: str
    html: Optional[str] = None
    error: Optional[str] = None
    failed_stage: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.succeeded:
            return {"html": self.html}
        return {"error": self.error, "stage": self.failed_stage}


def assemble_result(state: RunState, terminal_stage_id: str) -> PipelineResult:
    """
    Build the caller-facing result of a finished run.

    On success the terminal stage's artifact is returned verbatim; it is
    not validated or repaired. On failure no artifact is returned at all.

    Raises:
        RuntimeError: If the run has not finished
    """
    if state.status is RunStatus.SUCCEEDED:
        return PipelineResult(
            run_id=state.run_id,
            html=state.context.artifact(terminal_stage_id),
        )

    if state.status is RunStatus.FAILED:
        return PipelineResult(
            run_id=state.run_id,
            error=str(state.error),
            failed_stage=state.error.stage_id,
            error_kind=state.error.kind,
        )

    raise RuntimeError(f"run {state.run_id} has not finished ({state.status.value})")
