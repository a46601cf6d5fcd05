"""Pipeline stages for the game generation pipeline."""

from .cognitive import CognitiveStage

__all__ = [
    "CognitiveStage",
]
