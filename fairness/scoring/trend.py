"""Five-year trend of the composite fairness score."""
from __future__ import annotations

from datetime import datetime
from typing import Iterable

from fairness.core.utils import round_half_up
from fairness.normalization.normalizer import clamp

from .config import TrendPolicy
from .models import DECLINING, IMPROVING, STABLE, HistoricalScore, TrendResult

__all__ = ["estimate_trend"]


def estimate_trend(
    current_score: float,
    history: Iterable[HistoricalScore],
    current_year: int | None = None,
    policy: TrendPolicy | None = None,
) -> TrendResult:
    """Compare *current_score* with the newest score at or before the lookback year.

    The change is clamped to ``policy.max_change`` in either direction; when no
    eligible historical score exists the trend is stable with no change.
    """

    policy = policy or TrendPolicy()
    if current_year is None:
        current_year = datetime.utcnow().year
    target_year = current_year - policy.lookback_years

    eligible = [entry for entry in history if entry.year <= target_year]
    if not eligible:
        return TrendResult(direction=STABLE, change=0, years_compared=0)
    baseline = max(eligible, key=lambda entry: entry.year)

    change = int(round_half_up(current_score - baseline.score))
    capped = int(clamp(change, -policy.max_change, policy.max_change))

    if capped >= policy.direction_threshold:
        direction = IMPROVING
    elif capped <= -policy.direction_threshold:
        direction = DECLINING
    else:
        direction = STABLE
    return TrendResult(
        direction=direction,
        change=capped,
        years_compared=current_year - baseline.year,
    )
