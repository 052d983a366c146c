from __future__ import annotations

"""Core scoring logic: dimension aggregation, composite score, country results."""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Sequence

from fairness.core.utils import round_half_up
from fairness.normalization.normalizer import normalize_score

from .config import Methodology, validate_methodology
from .models import (
    HIGH,
    LOW,
    MEDIUM,
    CalculationMetadata,
    CountryCalculation,
    CountryProfile,
    DimensionScore,
    HistoricalScore,
    RawDataPoint,
    ScoringOutput,
    SourceContribution,
)
from .repository import RawDataStore, SourceKey
from .trend import estimate_trend

logger = logging.getLogger(__name__)


class FairnessEngine:
    """Turn raw index values into dimension, composite and trend results.

    The methodology is validated on construction so an inconsistent weight
    table fails before any country is scored.
    """

    def __init__(self, methodology: Methodology) -> None:
        validate_methodology(methodology)
        self.methodology = methodology

    @property
    def dimension_names(self) -> List[str]:
        return list(self.methodology.dimension_weights)

    def score_all(
        self,
        profiles: Iterable[CountryProfile],
        store: RawDataStore,
        history: Mapping[str, Sequence[HistoricalScore]] | None = None,
        now: datetime | None = None,
    ) -> ScoringOutput:
        history = history or {}
        now = now or datetime.utcnow()
        output = ScoringOutput()

        for profile in profiles:
            calculation = self.calculate_country(
                profile,
                store.for_country(profile.iso3),
                history.get(profile.iso3, ()),
                now=now,
            )
            if calculation.metadata.sources_used > 0:
                output.countries_with_data += 1
            output.sources_used += calculation.metadata.sources_used
            output.estimated_fields += calculation.metadata.estimated_fields
            output.calculations.append(calculation)

        output.calculations.sort(key=lambda item: (-item.fairness_score, item.iso3))
        return output

    def calculate_country(
        self,
        profile: CountryProfile,
        country_data: Mapping[SourceKey, RawDataPoint],
        history: Sequence[HistoricalScore] = (),
        now: datetime | None = None,
    ) -> CountryCalculation:
        """Score one country from its own data slice and score history."""

        logger.debug("Calculating: %s (%s)", profile.name, profile.iso3)
        dimensions: Dict[str, DimensionScore] = {
            name: self.aggregate(name, country_data) for name in self.dimension_names
        }
        fairness_score = self.composite(dimensions)

        now = now or datetime.utcnow()
        trend = estimate_trend(
            fairness_score,
            history,
            current_year=now.year,
            policy=self.methodology.trend,
        )

        sources_used = sum(len(dimension.sources) for dimension in dimensions.values())
        estimated_fields = sum(dimension.estimated_count for dimension in dimensions.values())
        low_dimensions = sum(1 for dimension in dimensions.values() if dimension.confidence == LOW)
        if low_dimensions > self.methodology.confidence.max_low_dimensions:
            confidence = LOW
        elif low_dimensions > 0:
            confidence = MEDIUM
        else:
            confidence = HIGH

        logger.debug(
            "  Final score for %s: %d (trend %s, %+d)",
            profile.iso3,
            fairness_score,
            trend.direction,
            trend.change,
        )
        return CountryCalculation(
            profile=profile,
            fairness_score=fairness_score,
            dimensions=dimensions,
            trend=trend,
            metadata=CalculationMetadata(
                calculated_at=now,
                data_year=now.year,
                sources_used=sources_used,
                estimated_fields=estimated_fields,
                confidence=confidence,
            ),
        )

    def aggregate(
        self,
        dimension: str,
        country_data: Mapping[SourceKey, RawDataPoint],
    ) -> DimensionScore:
        """Weighted mean of the sources that have data for *dimension*.

        Missing sources drop out of both numerator and denominator; a
        dimension without any data falls back to the neutral default score.
        """

        rule = self.methodology.dimension(dimension)
        contributions: List[SourceContribution] = []
        weighted_sum = 0.0
        total_weight = 0.0

        for source in rule.sources:
            point = country_data.get((source.source_id, source.field))
            if point is None:
                continue
            config = self.methodology.sources.by_id(source.source_id)
            normalized = normalize_score(point.value, config)
            contributions.append(
                SourceContribution(
                    source_id=source.source_id,
                    raw_value=point.value,
                    normalized_value=normalized,
                    weight=source.weight,
                    estimated=point.estimated,
                    field=source.field,
                    year=point.year,
                )
            )
            weighted_sum += normalized * source.weight
            total_weight += source.weight
            logger.debug(
                "  %s: %s -> %s (weight: %s)",
                source.source_id,
                point.value,
                normalized,
                source.weight,
            )

        if total_weight > 0:
            score = round_half_up(weighted_sum / total_weight, 1)
        else:
            score = float(self.methodology.default_score)

        return DimensionScore(
            dimension=dimension,
            score=score,
            sources=tuple(contributions),
            confidence=self._grade(total_weight, contributions),
            available_weight=total_weight,
            declared_weight=rule.declared_weight,
        )

    def composite(self, dimensions: Mapping[str, DimensionScore]) -> int:
        """Weighted mean of the dimension scores, rounded to a whole number."""

        weights = self.methodology.dimension_weights
        weighted_sum = 0.0
        total_weight = 0.0
        for name, dimension in dimensions.items():
            weight = weights.get(name, 0.0)
            weighted_sum += dimension.score * weight
            total_weight += weight
        if total_weight <= 0:
            return 0
        return int(round_half_up(weighted_sum / total_weight))

    def _grade(self, total_weight: float, contributions: Sequence[SourceContribution]) -> str:
        policy = self.methodology.confidence
        estimated = sum(1 for item in contributions if item.estimated)
        if total_weight < policy.low_weight or estimated > len(contributions) / 2:
            return LOW
        if total_weight < policy.medium_weight or estimated > 0:
            return MEDIUM
        return HIGH


__all__ = ["FairnessEngine"]
