from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence, Tuple

from ..errors import RegistryError
from .context import PipelineContext


def check_dependency_order(nodes: Iterable[Tuple[str, Sequence[str]]]) -> None:
    """
    Check that (name, requires) pairs are listed in a valid topological order.

    Raises:
        RegistryError: On a duplicate name or a requirement not declared earlier
    """
    seen = set()
    for name, requires in nodes:
        if name in seen:
            raise RegistryError(f"duplicate stage id '{name}'")
        for required in requires:
            if required not in seen:
                raise RegistryError(
                    f"stage '{name}' requires '{required}', which is not declared before it"
                )
        seen.add(name)


class Stage(ABC):
    """Base class for all pipeline stages. Must be async and return a new PipelineContext (never mutate input)."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    def requires(self) -> Tuple[str, ...]:
        """Names of earlier stages whose artifacts this stage reads."""
        return ()

    @abstractmethod
    async def execute(self, context: PipelineContext) -> PipelineContext:
        """
        Execute stage logic and return a new context.

        NEVER mutate the input context. Always return a new context.
        """
        pass


class Pipeline:
    """Ordered chain of stages. Immutable - with_stage() returns new pipeline.

    Stage order is checked on construction; the executor runs stages in
    exactly this order and never reorders them.
    """

    def __init__(self, stages: List[Stage] | None = None):
        self.stages = tuple(stages or [])
        check_dependency_order((stage.name, stage.requires) for stage in self.stages)

    def with_stage(self, stage: Stage) -> "Pipeline":
        """
        Return new pipeline with stage appended.

        Creates a new pipeline, leaves the original unchanged.
        """
        return Pipeline(list(self.stages) + [stage])

    @property
    def stage_names(self) -> List[str]:
        return [s.name for s in self.stages]

    def __len__(self) -> int:
        return len(self.stages)

    def __repr__(self) -> str:
        return f"Pipeline(stages={self.stage_names})"
