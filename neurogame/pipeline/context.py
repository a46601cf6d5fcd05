"""Pipeline context carrying the task and stage artifacts through a run."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional


@dataclass(frozen=True)
class ContextKey:
    """Type-safe context key identifier."""

    name: str

    def __str__(self) -> str:
        return self.name


TASK = ContextKey("task")
RUN_ID = "run_id"


def artifact_key(stage_id: str) -> ContextKey:
    """Context key under which a stage's artifact is stored."""
    return ContextKey(f"artifact:{stage_id}")


@dataclass(frozen=True)
class PipelineContext:
    """
    Immutable context that flows through pipeline stages.

    Each stage receives a context and produces a new context with its
    artifact added. Context is never mutated in place, and an artifact
    can be written only once.
    """

    _data: Dict[str, Any] = field(default_factory=dict)
    _metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_task(cls, task: str, run_id: Optional[str] = None) -> "PipelineContext":
        """Create the initial context of a run."""
        context = cls().set(TASK, task)
        if run_id is not None:
            context = context.set_metadata(RUN_ID, run_id)
        return context

    def get(self, key: ContextKey, default: Any = None) -> Any:
        """Get value from context."""
        return self._data.get(str(key), default)

    def set(self, key: ContextKey, value: Any) -> "PipelineContext":
        """
        Return a new context with the key set.
        Context is immutable - this returns a new instance.
        """
        new_data = self._data.copy()
        new_data[str(key)] = value
        return PipelineContext(_data=new_data, _metadata=self._metadata.copy())

    def get_metadata(self, key: str, default: Any = None) -> Any:
        """Get metadata value (for internal pipeline use)."""
        return self._metadata.get(key, default)

    def set_metadata(self, key: str, value: Any) -> "PipelineContext":
        """Return a new context with metadata set."""
        new_metadata = self._metadata.copy()
        new_metadata[key] = value
        return PipelineContext(_data=self._data.copy(), _metadata=new_metadata)

    def has(self, key: ContextKey) -> bool:
        """Check if key exists in context."""
        return str(key) in self._data

    @property
    def task(self) -> str:
        task = self.get(TASK)
        if task is None:
            raise KeyError("task is not set in context")
        return task

    def has_artifact(self, stage_id: str) -> bool:
        return self.has(artifact_key(stage_id))

    def artifact(self, stage_id: str) -> str:
        """Get the artifact a stage produced; KeyError if it has not run."""
        key = artifact_key(stage_id)
        if not self.has(key):
            raise KeyError(f"no artifact for stage '{stage_id}'")
        return self.get(key)

    def with_artifact(self, stage_id: str, text: str) -> "PipelineContext":
        """Return a new context with the stage's artifact recorded."""
        if self.has_artifact(stage_id):
            raise ValueError(f"artifact for stage '{stage_id}' already recorded")
        return self.set(artifact_key(stage_id), text)

    def select(self, stage_ids: Iterable[str]) -> Dict[str, str]:
        """Artifacts of the given stages, in the given order."""
        return {stage_id: self.artifact(stage_id) for stage_id in stage_ids}

    def artifact_ids(self) -> list[str]:
        prefix = "artifact:"
        return [key[len(prefix):] for key in self._data if key.startswith(prefix)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dict (for debugging and tests)."""
        return {
            "data": self._data.copy(),
            "metadata": self._metadata.copy(),
        }
