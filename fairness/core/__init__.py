"""Core orchestration utilities for the fairness runtime."""
from __future__ import annotations

from .registry import StageRegistry, register_stage, registry
from .runner import StageRunner, StageTiming
from .stage import StageContext, StageDefinition

__all__ = [
    "StageRegistry",
    "StageRunner",
    "StageTiming",
    "StageContext",
    "StageDefinition",
    "register_stage",
    "registry",
]
