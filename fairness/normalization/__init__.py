"""Normalization of raw index values onto the fairness scale."""
from __future__ import annotations

from .normalizer import clamp, normalize, normalize_score, normalize_whole
from .sources import ConfigurationError, SourceCatalog, SourceConfig

__all__ = [
    "ConfigurationError",
    "SourceCatalog",
    "SourceConfig",
    "clamp",
    "normalize",
    "normalize_score",
    "normalize_whole",
]
