from __future__ import annotations

"""In-memory access to raw data points for the scoring engine."""

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .models import RawDataPoint

logger = logging.getLogger(__name__)

SourceKey = Tuple[str, Optional[str]]


class RawDataStore:
    """Read-only lookup of raw data points keyed by country, source and field."""

    def __init__(self, points: Iterable[RawDataPoint] = ()) -> None:
        self._points: Dict[str, Dict[SourceKey, RawDataPoint]] = {}
        for point in points:
            self._add(point)

    def _add(self, point: RawDataPoint) -> None:
        country = self._points.setdefault(point.country, {})
        key = (point.source_id, point.field)
        if key in country:
            logger.warning(
                "Duplicate data point for %s %s%s; keeping the value loaded last.",
                point.country,
                point.source_id,
                f"/{point.field}" if point.field else "",
            )
        country[key] = point

    def get(
        self, country: str, source_id: str, field: Optional[str] = None
    ) -> RawDataPoint | None:
        return self._points.get(country, {}).get((source_id, field))

    def for_country(self, country: str) -> Mapping[SourceKey, RawDataPoint]:
        """Return the slice of data points belonging to *country*."""

        return dict(self._points.get(country, {}))

    def countries(self) -> List[str]:
        return sorted(self._points)

    def __contains__(self, country: object) -> bool:
        return country in self._points

    def __iter__(self) -> Iterator[RawDataPoint]:
        for country in sorted(self._points):
            yield from self._points[country].values()

    def __len__(self) -> int:
        return sum(len(points) for points in self._points.values())


__all__ = ["RawDataStore", "SourceKey"]
