"""Stage registry: the static, ordered table of the nine cognitive stages.

Each stage declares the earlier artifacts its prompt is built from
(``requires``). Stages never see artifacts outside that list; for example
``world_model`` judges only the plan, not the narrative that led to it.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..errors import RegistryError
from ..model_config import StageModelOverride
from .base import check_dependency_order
from .context import TASK


class ProviderKind(str, Enum):
    """Provider backends a stage can run on."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass(frozen=True)
class StageDefinition:
    """One named step of the pipeline."""

    id: str
    label: str
    role: str
    requires: Tuple[str, ...]
    provider: ProviderKind
    model: str
    max_output_tokens: Optional[int] = None

    def build_prompt(
        self,
        task: str,
        artifacts: Mapping[str, str],
        labels: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Build the user prompt from the task and the required artifacts.

        The first line is ``Task: {task}``; then one ``{label}: {artifact}``
        line per required stage, in ``requires`` order. Only ids listed in
        ``requires`` are read from ``artifacts``.

        Raises:
            KeyError: If a required artifact is missing
        """
        labels = _LABELS if labels is None else labels
        lines = [f"Task: {task}"]
        for stage_id in self.requires:
            lines.append(f"{labels.get(stage_id, stage_id)}: {artifacts[stage_id]}")
        return "\n".join(lines)


PERCEPTION_ROLE = (
    "You are the sensory perception module, modeled after the primary sensory "
    "cortex. You receive the raw game design request and restate it as a clear, "
    "structured game concept covering core mechanics, theme and user experience."
)

ATTENTION_ROLE = (
    "You are the attention and relevance filter, modeled after the parietal "
    "cortex. From the structured game concept, extract the most critical "
    "elements (mechanics, control scheme, themes, visual style) and return them "
    "as a concise, prioritized list."
)

MEMORY_ROLE = (
    "You are the memory recall system, modeled after the hippocampus. Recall "
    "the background knowledge, design patterns, tutorials and successful "
    "browser game examples relevant to the identified elements, and summarize "
    "what supports this game concept."
)

EMOTION_ROLE = (
    "You are the emotion and reward module, modeled after the amygdala and "
    "ventral striatum. Assess the emotional impact and engagement potential of "
    "the game concept, and point out how the design can create positive "
    "feelings and player satisfaction."
)

CONTEXT_ROLE = (
    "You are the narrative and context synthesis module, modeled after the "
    "medial prefrontal cortex and default mode network. Place the game concept "
    "in its wider context (market trends, long-term engagement, societal "
    "values) and write a comprehensive narrative that sets the stage for it."
)

PLANNING_ROLE = (
    "You are the planning module, modeled after the prefrontal cortex. Produce "
    "several viable strategies for implementing the game as a single web page. "
    "Each plan must be detailed, step by step and directly actionable."
)

WORLD_MODEL_ROLE = (
    "You are the world model evaluator, modeled after the cerebellum. Judge "
    "the real-world feasibility of the proposed plans: practical constraints, "
    "browser and platform limitations, input handling and UI requirements. "
    "Give a thorough evaluation."
)

DECISION_ROLE = (
    "You are the decision-making module, modeled after the orbitofrontal "
    "cortex. Weigh the strategies against the feasibility evaluation, choose "
    "the best game design plan and justify the choice in detail."
)

ACTION_ROLE = (
    "You are the motor execution system, modeled after the motor cortex. Write "
    "a complete, ready-to-run HTML file implementing the game from the chosen "
    "plan, including the game area, controls and all styles and scripts "
    "embedded inline. Check the code for bugs before answering. Respond with "
    "ONLY the HTML file, starting with <!DOCTYPE html> and ending with </html>."
)


STAGES: Tuple[StageDefinition, ...] = (
    StageDefinition(
        id="perception",
        label="Perception Output",
        role=PERCEPTION_ROLE,
        requires=(),
        provider=ProviderKind.OPENAI,
        model="gpt-4o",
    ),
    StageDefinition(
        id="attention",
        label="Attention Output",
        role=ATTENTION_ROLE,
        requires=("perception",),
        provider=ProviderKind.OPENAI,
        model="gpt-4o",
    ),
    StageDefinition(
        id="memory",
        label="Memory Output",
        role=MEMORY_ROLE,
        requires=("perception", "attention"),
        provider=ProviderKind.OPENAI,
        model="gpt-4o-search-preview",
    ),
    StageDefinition(
        id="emotion",
        label="Emotion Output",
        role=EMOTION_ROLE,
        requires=("perception", "attention", "memory"),
        provider=ProviderKind.OPENAI,
        model="gpt-4.5-preview",
    ),
    StageDefinition(
        id="context",
        label="Context Output",
        role=CONTEXT_ROLE,
        requires=("perception", "attention", "memory", "emotion"),
        provider=ProviderKind.OPENAI,
        model="gpt-4.5-preview",
    ),
    StageDefinition(
        id="planning",
        label="Planning Output",
        role=PLANNING_ROLE,
        requires=("perception", "attention", "memory", "emotion", "context"),
        provider=ProviderKind.OPENAI,
        model="o3-mini",
    ),
    StageDefinition(
        id="world_model",
        label="World Model Output",
        role=WORLD_MODEL_ROLE,
        requires=("planning",),
        provider=ProviderKind.OPENAI,
        model="o3-mini",
    ),
    StageDefinition(
        id="decision",
        label="Decision",
        role=DECISION_ROLE,
        requires=("planning", "world_model"),
        provider=ProviderKind.OPENAI,
        model="o1",
    ),
    StageDefinition(
        id="action",
        label="Action Output",
        role=ACTION_ROLE,
        requires=("decision",),
        provider=ProviderKind.ANTHROPIC,
        model="claude-3-7-sonnet-20250219",
        max_output_tokens=16384,
    ),
)

_LABELS: Dict[str, str] = {stage.id: stage.label for stage in STAGES}


def validate_stage_order(stages: Iterable[StageDefinition]) -> Tuple[StageDefinition, ...]:
    """
    Check that a stage table is a valid topological order.

    Ids must be unique and every required id must be declared earlier.
    Anthropic stages need an output-token ceiling.

    Returns:
        The stages as a tuple

    Raises:
        RegistryError: If the table is invalid
    """
    stages = tuple(stages)
    if not stages:
        raise RegistryError("stage table is empty")

    check_dependency_order((stage.id, stage.requires) for stage in stages)

    for stage in stages:
        if stage.id == str(TASK):
            raise RegistryError(f"'{TASK}' is reserved and cannot be a stage id")
        if stage.provider is ProviderKind.ANTHROPIC and not stage.max_output_tokens:
            raise RegistryError(f"stage '{stage.id}' needs max_output_tokens")

    return stages


def apply_overrides(
    stages: Iterable[StageDefinition],
    overrides: Mapping[str, StageModelOverride],
) -> Tuple[StageDefinition, ...]:
    """
    Return a new stage table with model selection overrides applied.

    Raises:
        RegistryError: On an unknown stage id or provider, or if the result is invalid
    """
    stages = tuple(stages)
    known = {stage.id for stage in stages}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise RegistryError(f"overrides for unknown stages: {unknown}")

    updated = []
    for stage in stages:
        override = overrides.get(stage.id)
        if override is None:
            updated.append(stage)
            continue

        changes = {}
        if override.model:
            changes["model"] = override.model
        if override.provider:
            try:
                changes["provider"] = ProviderKind(override.provider)
            except ValueError:
                raise RegistryError(
                    f"stage '{stage.id}': unknown provider '{override.provider}'"
                ) from None
        if override.max_output_tokens is not None:
            changes["max_output_tokens"] = override.max_output_tokens
        updated.append(dataclasses.replace(stage, **changes))

    return validate_stage_order(updated)


def get_stage(stage_id: str, stages: Iterable[StageDefinition] = STAGES) -> StageDefinition:
    for stage in stages:
        if stage.id == stage_id:
            return stage
    raise KeyError(f"unknown stage '{stage_id}'")


TERMINAL_STAGE_ID = STAGES[-1].id

validate_stage_order(STAGES)
