from __future__ import annotations

"""Dataclasses used across the scoring pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple

HIGH = "high"
MEDIUM = "medium"
LOW = "low"

IMPROVING = "improving"
DECLINING = "declining"
STABLE = "stable"


@dataclass(slots=True, frozen=True)
class RawDataPoint:
    """One observation of an index for a country."""

    country: str
    source_id: str
    value: float
    year: int
    field: Optional[str] = None
    estimated: bool = False

    @property
    def key(self) -> Tuple[str, str, Optional[str]]:
        return (self.country, self.source_id, self.field)


@dataclass(slots=True, frozen=True)
class HistoricalScore:
    """Composite score published for a country in an earlier year."""

    year: int
    score: float


@dataclass(slots=True, frozen=True)
class CountryProfile:
    """Reference metadata for a country."""

    iso3: str
    name: str
    region: str
    subregion: str
    population: Optional[float] = None
    gdp_per_capita: Optional[float] = None


@dataclass(slots=True, frozen=True)
class SourceContribution:
    """Audit entry for a source that contributed to a dimension score."""

    source_id: str
    raw_value: float
    normalized_value: float
    weight: float
    estimated: bool
    field: Optional[str] = None
    year: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "sourceId": self.source_id,
            "rawValue": self.raw_value,
            "normalizedValue": self.normalized_value,
            "weight": self.weight,
            "estimated": self.estimated,
        }
        if self.field:
            payload["field"] = self.field
        if self.year is not None:
            payload["year"] = self.year
        return payload


@dataclass(slots=True, frozen=True)
class DimensionScore:
    """Aggregated score for one fairness dimension."""

    dimension: str
    score: float
    sources: Tuple[SourceContribution, ...]
    confidence: str
    available_weight: float = 0.0
    declared_weight: float = 0.0

    @property
    def estimated_count(self) -> int:
        return sum(1 for source in self.sources if source.estimated)

    @property
    def has_data(self) -> bool:
        return bool(self.sources)

    def to_dict(self) -> Dict[str, object]:
        return {
            "score": self.score,
            "sources": [source.to_dict() for source in self.sources],
            "confidence": self.confidence,
        }


@dataclass(slots=True, frozen=True)
class TrendResult:
    """Direction and size of the composite score change over the lookback."""

    direction: str = STABLE
    change: int = 0
    years_compared: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "direction": self.direction,
            "change": self.change,
            "yearsCompared": self.years_compared,
        }


@dataclass(slots=True, frozen=True)
class CalculationMetadata:
    calculated_at: datetime
    data_year: int
    sources_used: int
    estimated_fields: int
    confidence: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "calculatedAt": self.calculated_at.isoformat(),
            "dataYear": self.data_year,
            "sourcesUsed": self.sources_used,
            "estimatedFields": self.estimated_fields,
            "confidence": self.confidence,
        }


@dataclass(slots=True, frozen=True)
class CountryCalculation:
    """Final fairness result for a single country."""

    profile: CountryProfile
    fairness_score: int
    dimensions: Mapping[str, DimensionScore]
    trend: TrendResult
    metadata: CalculationMetadata

    @property
    def iso3(self) -> str:
        return self.profile.iso3

    @property
    def name(self) -> str:
        return self.profile.name

    def to_dict(self) -> Dict[str, object]:
        return {
            "iso3": self.profile.iso3,
            "name": self.profile.name,
            "region": self.profile.region,
            "subregion": self.profile.subregion,
            "fairnessScore": self.fairness_score,
            "dimensions": {
                name: dimension.to_dict() for name, dimension in self.dimensions.items()
            },
            "trend": self.trend.to_dict(),
            "metadata": self.metadata.to_dict(),
        }


@dataclass(slots=True)
class ScoringOutput:
    """Container for the scoring engine results."""

    calculations: List[CountryCalculation] = field(default_factory=list)
    countries_with_data: int = 0
    sources_used: int = 0
    estimated_fields: int = 0


__all__ = [
    "CalculationMetadata",
    "CountryCalculation",
    "CountryProfile",
    "DECLINING",
    "DimensionScore",
    "HIGH",
    "HistoricalScore",
    "IMPROVING",
    "LOW",
    "MEDIUM",
    "RawDataPoint",
    "STABLE",
    "ScoringOutput",
    "SourceContribution",
    "TrendResult",
]
