from __future__ import annotations

"""Helpers to load and validate the scoring methodology file."""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Tuple

import yaml

from fairness.normalization.sources import ConfigurationError, SourceCatalog, SourceConfig

CANONICAL_DIMENSIONS: Tuple[str, ...] = (
    "democraticVoice",
    "pressFreedom",
    "justiceAccess",
    "economicOpportunity",
    "workplaceRights",
    "healthcareAccess",
    "housingSecurity",
    "consumerProtection",
    "governmentResponsiveness",
    "socialInclusion",
)


class UnknownDimensionError(KeyError):
    """Raised when aggregation is requested for an undeclared dimension."""


@dataclass(slots=True, frozen=True)
class SourceWeight:
    """One source contributing to a dimension."""

    source_id: str
    weight: float
    field: str | None = None


@dataclass(slots=True, frozen=True)
class DimensionRule:
    """Sources and weights declared for a single dimension."""

    name: str
    sources: Tuple[SourceWeight, ...]

    @property
    def declared_weight(self) -> float:
        return sum(source.weight for source in self.sources)


@dataclass(slots=True, frozen=True)
class ConfidencePolicy:
    """Weight cut-offs used to grade dimension and country confidence."""

    low_weight: float = 0.5
    medium_weight: float = 0.8
    max_low_dimensions: int = 3


@dataclass(slots=True, frozen=True)
class TrendPolicy:
    lookback_years: int = 5
    max_change: int = 15
    direction_threshold: int = 3


@dataclass(slots=True, frozen=True)
class Methodology:
    """Parsed scoring methodology, built once and shared read-only."""

    version: str
    dimension_weights: Mapping[str, float]
    sources: SourceCatalog
    dimensions: Mapping[str, DimensionRule]
    confidence: ConfidencePolicy = field(default_factory=ConfidencePolicy)
    trend: TrendPolicy = field(default_factory=TrendPolicy)
    default_score: float = 50.0
    weight_tolerance: float = 0.001

    def dimension(self, name: str) -> DimensionRule:
        try:
            return self.dimensions[name]
        except KeyError as exc:
            raise UnknownDimensionError(f"Unknown dimension: {name}") from exc

    @property
    def weight_sum(self) -> float:
        return math.fsum(self.dimension_weights.values())


def validate_methodology(methodology: Methodology) -> None:
    """Fail fast when the methodology cannot produce trustworthy scores."""

    total = methodology.weight_sum
    if abs(total - 1.0) > methodology.weight_tolerance:
        raise ConfigurationError(
            f"Dimension weights sum to {total:.4f}; expected 1.0 "
            f"(tolerance {methodology.weight_tolerance})"
        )
    methodology.sources.validate()

    weighted = set(methodology.dimension_weights)
    if weighted != set(CANONICAL_DIMENSIONS):
        raise ConfigurationError(
            "Dimension weights must cover exactly the canonical dimensions; "
            f"missing {sorted(set(CANONICAL_DIMENSIONS) - weighted)}, "
            f"unexpected {sorted(weighted - set(CANONICAL_DIMENSIONS))}"
        )
    unmapped = [name for name in CANONICAL_DIMENSIONS if name not in methodology.dimensions]
    if unmapped:
        raise ConfigurationError(f"Weighted dimensions without source mapping: {unmapped}")

    for rule in methodology.dimensions.values():
        if not rule.sources:
            raise ConfigurationError(f"Dimension '{rule.name}' declares no sources")
        for source in rule.sources:
            if source.source_id not in methodology.sources:
                raise ConfigurationError(
                    f"Dimension '{rule.name}' references unknown source '{source.source_id}'"
                )
            if source.weight <= 0:
                raise ConfigurationError(
                    f"Dimension '{rule.name}' gives source '{source.source_id}' "
                    f"a non-positive weight {source.weight}"
                )


def _load_source(source_id: str, payload: Mapping[str, object]) -> SourceConfig:
    input_range = payload.get("range")
    if not isinstance(input_range, (list, tuple)) or len(input_range) != 2:
        raise ConfigurationError(f"Source '{source_id}' must declare range: [min, max]")
    return SourceConfig(
        source_id=source_id,
        min_value=float(input_range[0]),
        max_value=float(input_range[1]),
        invert=bool(payload.get("invert", False)),
        name=str(payload["name"]) if payload.get("name") else None,
        description=str(payload["description"]) if payload.get("description") else None,
    )


def _load_dimension(name: str, entries: object) -> DimensionRule:
    if not isinstance(entries, list):
        raise ConfigurationError(f"Dimension '{name}' must list its sources")
    sources = []
    for entry in entries:
        if not isinstance(entry, Mapping) or "source" not in entry:
            raise ConfigurationError(f"Invalid source entry for dimension '{name}': {entry!r}")
        sources.append(
            SourceWeight(
                source_id=str(entry["source"]),
                weight=float(entry.get("weight", 0.0)),
                field=str(entry["field"]) if entry.get("field") else None,
            )
        )
    return DimensionRule(name=name, sources=tuple(sources))


def parse_methodology(payload: Mapping[str, object]) -> Methodology:
    """Build a :class:`Methodology` from an already-parsed mapping."""

    weights_raw = payload.get("dimension_weights") or {}
    if not isinstance(weights_raw, Mapping) or not weights_raw:
        raise ConfigurationError("No dimension weights defined in methodology")
    dimension_weights: Dict[str, float] = {
        str(key): float(value) for key, value in weights_raw.items()
    }

    sources_raw = payload.get("sources") or {}
    catalog = SourceCatalog(
        _load_source(str(source_id), source_payload)
        for source_id, source_payload in sources_raw.items()
        if isinstance(source_payload, Mapping)
    )

    dimensions: Dict[str, DimensionRule] = {}
    for name, entries in (payload.get("dimensions") or {}).items():
        dimensions[str(name)] = _load_dimension(str(name), entries)

    confidence_raw = payload.get("confidence") or {}
    trend_raw = payload.get("trend") or {}
    defaults = ConfidencePolicy()
    trend_defaults = TrendPolicy()
    return Methodology(
        version=str(payload.get("version", "1")),
        dimension_weights=dimension_weights,
        sources=catalog,
        dimensions=dimensions,
        confidence=ConfidencePolicy(
            low_weight=float(confidence_raw.get("low_weight", defaults.low_weight)),
            medium_weight=float(confidence_raw.get("medium_weight", defaults.medium_weight)),
            max_low_dimensions=int(
                confidence_raw.get("max_low_dimensions", defaults.max_low_dimensions)
            ),
        ),
        trend=TrendPolicy(
            lookback_years=int(trend_raw.get("lookback_years", trend_defaults.lookback_years)),
            max_change=int(trend_raw.get("max_change", trend_defaults.max_change)),
            direction_threshold=int(
                trend_raw.get("direction_threshold", trend_defaults.direction_threshold)
            ),
        ),
        default_score=float(payload.get("default_score", 50.0)),
        weight_tolerance=float(payload.get("weight_tolerance", 0.001)),
    )


def load_methodology(path: Path) -> Methodology:
    """Load and validate the methodology stored at *path*."""

    if not path.exists():
        raise FileNotFoundError(f"Methodology file not found at {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse methodology {path}: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"Methodology {path} must be a mapping")
    methodology = parse_methodology(payload)
    validate_methodology(methodology)
    return methodology


__all__ = [
    "CANONICAL_DIMENSIONS",
    "ConfidencePolicy",
    "ConfigurationError",
    "DimensionRule",
    "Methodology",
    "SourceWeight",
    "TrendPolicy",
    "UnknownDimensionError",
    "load_methodology",
    "parse_methodology",
    "validate_methodology",
]
