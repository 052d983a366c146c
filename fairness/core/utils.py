"""Miscellaneous helpers for the fairness runtime."""
from __future__ import annotations

import math
from importlib import metadata

__all__ = ["pipeline_version", "round_half_up"]


def pipeline_version() -> str:
    """Return the installed package version or a sensible default."""

    try:
        return metadata.version("world-fairness")
    except metadata.PackageNotFoundError:  # pragma: no cover - fallback path
        return "0.0.0"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round *value* to *digits* decimals with halves rounded towards +inf.

    Published scores were produced with half-up rounding; Python's built-in
    ``round`` rounds halves to even and would drift on values such as 92.45.
    """

    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
