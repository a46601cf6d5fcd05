"""Stage that runs one StageDefinition against its provider."""

import logging
from typing import Mapping, Optional, Tuple

from ...errors import InvocationError, ProviderError
from ...providers.base import BaseLLMProvider
from ..base import Stage
from ..context import PipelineContext
from ..registry import StageDefinition

logger = logging.getLogger(__name__)


class CognitiveStage(Stage):
    """
    One cognitive stage bound to a provider instance.

    This stage:
    1. Selects exactly the artifacts listed in the definition's ``requires``
    2. Builds the prompt from the task and those artifacts
    3. Makes one provider call with the stage's role and model
    4. Returns a new context with the trimmed text recorded as its artifact
    """

    def __init__(
        self,
        definition: StageDefinition,
        provider: BaseLLMProvider,
        labels: Optional[Mapping[str, str]] = None,
    ):
        super().__init__()
        self.definition = definition
        self.provider = provider
        self.labels = labels

    @property
    def name(self) -> str:
        return self.definition.id

    @property
    def requires(self) -> Tuple[str, ...]:
        return self.definition.requires

    def build_prompt(self, context: PipelineContext) -> str:
        artifacts = context.select(self.definition.requires)
        return self.definition.build_prompt(context.task, artifacts, self.labels)

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """
        Execute the stage.

        Raises:
            InvocationError: If the provider call fails
        """
        prompt = self.build_prompt(context)
        logger.info(
            f"🧠 {self.name}: querying {self.definition.provider.value}/{self.definition.model}"
        )

        try:
            text = await self.provider.invoke(
                self.definition.role,
                prompt,
                self.definition.model,
                max_tokens=self.definition.max_output_tokens,
            )
        except ProviderError as e:
            raise InvocationError(self.name, e) from e

        logger.debug(f"{self.name} produced {len(text)} characters")
        return context.with_artifact(self.name, text)
