"""Pipeline of cognitive stages that turns one request into an HTML game.

This module provides:
- Stage / Pipeline: ordered, immutable chain of async stages
- PipelineContext: immutable store of the task and stage artifacts
- Stage registry: the nine stage definitions and their requires sets
- PipelineExecutor: fail-fast sequential execution
- GamePipeline: providers + registry + executor + result assembly
"""

from .base import Stage, Pipeline
from .context import PipelineContext, ContextKey
from .registry import STAGES, TERMINAL_STAGE_ID, ProviderKind, StageDefinition
from .executor import PipelineExecutor, RunState, RunStatus, StageProgress
from .result import PipelineResult, assemble_result
from .game_pipeline import GamePipeline, build_pipeline

__all__ = [
    "Stage",
    "Pipeline",
    "PipelineContext",
    "ContextKey",
    "STAGES",
    "TERMINAL_STAGE_ID",
    "ProviderKind",
    "StageDefinition",
    "PipelineExecutor",
    "RunState",
    "RunStatus",
    "StageProgress",
    "PipelineResult",
    "assemble_result",
    "GamePipeline",
    "build_pipeline",
]
