"""Linear rescaling of raw index values onto the common 0-100 scale."""
from __future__ import annotations

import math

from fairness.core.utils import round_half_up

from .sources import ConfigurationError, SourceConfig

__all__ = ["clamp", "normalize", "normalize_score", "normalize_whole"]


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def normalize(raw_value: float, config: SourceConfig, precision: int = 1) -> float:
    """Map *raw_value* from the source's native range onto 0-100.

    Values outside ``[min_value, max_value]`` are clamped rather than
    rejected; NaN has no place on the scale and raises ``ValueError``. The
    result is rounded half-up to *precision* decimals.
    """

    if not config.min_value < config.max_value:
        raise ConfigurationError(
            f"Cannot normalize '{config.source_id}': input range "
            f"[{config.min_value}, {config.max_value}] is empty"
        )
    if math.isnan(raw_value):
        raise ValueError(f"Cannot normalize NaN for source '{config.source_id}'")
    clamped = clamp(raw_value, config.min_value, config.max_value)
    fraction = (clamped - config.min_value) / config.span
    if config.invert:
        fraction = 1 - fraction
    return round_half_up(fraction * 100, precision)


def normalize_score(raw_value: float, config: SourceConfig) -> float:
    """One-decimal normalization used by dimension aggregation."""

    return normalize(raw_value, config, precision=1)


def normalize_whole(raw_value: float, config: SourceConfig) -> int:
    """Whole-number normalization used by the legacy summary scores."""

    return int(normalize(raw_value, config, precision=0))
