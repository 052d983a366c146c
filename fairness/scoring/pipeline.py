from __future__ import annotations

"""Scoring pipeline orchestration."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Mapping, Sequence

from .config import load_methodology
from .engine import FairnessEngine
from .models import CountryCalculation, CountryProfile, HistoricalScore
from .repository import RawDataStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineSummary:
    """Counters reported by the scoring stage."""

    countries_evaluated: int
    countries_with_data: int
    sources_used: int
    estimated_fields: int
    calculations: List[CountryCalculation] = field(default_factory=list)


def select_profiles(
    profiles: Sequence[CountryProfile], countries: Iterable[str] | None
) -> List[CountryProfile]:
    """Restrict *profiles* to the requested ISO3 codes, preserving order."""

    if not countries:
        return list(profiles)
    wanted = {code.strip().upper() for code in countries}
    selected = [profile for profile in profiles if profile.iso3 in wanted]
    unknown = wanted - {profile.iso3 for profile in selected}
    if unknown:
        raise ValueError(f"Unknown country code(s): {', '.join(sorted(unknown))}")
    return selected


def run_pipeline(
    *,
    methodology_path: Path,
    profiles: Sequence[CountryProfile],
    store: RawDataStore,
    history: Mapping[str, Sequence[HistoricalScore]] | None = None,
    countries: Iterable[str] | None = None,
    now: datetime | None = None,
) -> PipelineSummary:
    """Execute the scoring pipeline."""

    engine = FairnessEngine(load_methodology(methodology_path))
    selected = select_profiles(profiles, countries)
    if not selected:
        logger.warning("No country profiles available; skipping scoring stage.")
        return PipelineSummary(0, 0, 0, 0)

    known = {profile.iso3 for profile in profiles}
    orphaned = [code for code in store.countries() if code not in known]
    if orphaned:
        logger.warning(
            "%d country code(s) have data but no reference profile and were skipped: %s",
            len(orphaned),
            ", ".join(orphaned),
        )

    output = engine.score_all(selected, store, history, now=now)
    if output.countries_with_data < len(selected):
        logger.warning(
            "%d country(ies) had no source data and received the neutral default score.",
            len(selected) - output.countries_with_data,
        )
    logger.info(
        "Scoring complete for %d country(ies); %d source value(s) used, %d estimated.",
        len(selected),
        output.sources_used,
        output.estimated_fields,
    )
    return PipelineSummary(
        countries_evaluated=len(selected),
        countries_with_data=output.countries_with_data,
        sources_used=output.sources_used,
        estimated_fields=output.estimated_fields,
        calculations=output.calculations,
    )


__all__ = ["PipelineSummary", "run_pipeline", "select_profiles"]
