"""Short factual sentences shown next to a country's score."""
from __future__ import annotations

import re
from typing import List

from fairness.scoring.models import DECLINING, IMPROVING, LOW, CountryCalculation

__all__ = ["dimension_label", "narrative_facts"]


def dimension_label(name: str) -> str:
    """Turn ``pressFreedom`` into ``press freedom``."""

    return re.sub(r"(?<!^)(?=[A-Z])", " ", name).lower()


def narrative_facts(calculation: CountryCalculation) -> List[str]:
    name = calculation.profile.name
    measured = [item for item in calculation.dimensions.values() if item.has_data]
    facts: List[str] = []

    if measured:
        strongest = max(measured, key=lambda item: item.score)
        weakest = min(measured, key=lambda item: item.score)
        facts.append(
            f"{name} scores highest on {dimension_label(strongest.dimension)} "
            f"({strongest.score:g}/100)."
        )
        if weakest.dimension != strongest.dimension:
            facts.append(
                f"Its weakest dimension is {dimension_label(weakest.dimension)} "
                f"({weakest.score:g}/100)."
            )
    else:
        facts.append(f"No source data is available for {name}; all dimensions use the neutral default.")

    trend = calculation.trend
    if trend.years_compared:
        if trend.direction == IMPROVING:
            facts.append(f"Score improved by {trend.change} points over {trend.years_compared} years.")
        elif trend.direction == DECLINING:
            facts.append(
                f"Score declined by {abs(trend.change)} points over {trend.years_compared} years."
            )
        else:
            facts.append(f"Score has been stable over {trend.years_compared} years.")

    metadata = calculation.metadata
    if metadata.estimated_fields:
        facts.append(f"{metadata.estimated_fields} of {metadata.sources_used} source values are estimates.")
    if measured and metadata.confidence == LOW:
        facts.append("Data coverage is limited; treat this score with caution.")
    return facts
