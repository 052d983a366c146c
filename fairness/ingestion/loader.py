"""Load processed index values and score history from JSON files."""
from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping

from fairness.scoring.models import HistoricalScore, RawDataPoint
from fairness.scoring.repository import RawDataStore

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = ("countryIso3", "sourceId", "year", "value")


class DataFileError(RuntimeError):
    """Raised when a processed data file cannot be read."""


def _read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise DataFileError(f"Failed to parse {path}: {exc}") from exc


def _to_point(entry: Mapping[str, Any]) -> RawDataPoint | None:
    if any(entry.get(key) is None for key in _REQUIRED_KEYS):
        return None
    value = entry["value"]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    estimated = entry.get("estimated", False)
    if estimated is None:
        estimated = False
    if not isinstance(estimated, bool):
        return None
    try:
        year = int(entry["year"])
    except (TypeError, ValueError):
        return None
    field = entry.get("field")
    return RawDataPoint(
        country=str(entry["countryIso3"]).strip().upper(),
        source_id=str(entry["sourceId"]),
        value=float(value),
        year=year,
        field=str(field) if field else None,
        estimated=estimated,
    )


def parse_data_points(payload: Any, *, origin: str = "<memory>") -> List[RawDataPoint]:
    """Convert a decoded JSON array into data points, skipping malformed rows."""

    if not isinstance(payload, list):
        raise DataFileError(f"{origin} must contain a JSON array of data points")
    points: List[RawDataPoint] = []
    skipped = 0
    for entry in payload:
        point = _to_point(entry) if isinstance(entry, Mapping) else None
        if point is None:
            skipped += 1
            continue
        points.append(point)
    if skipped:
        logger.warning("Skipped %d malformed row(s) in %s", skipped, origin)
    return points


def load_data_points(directory: Path) -> RawDataStore:
    """Read every ``*.json`` file in *directory* into a :class:`RawDataStore`."""

    if not directory.exists():
        logger.warning("Processed data directory %s does not exist; no data loaded.", directory)
        return RawDataStore()
    points: List[RawDataPoint] = []
    for path in sorted(directory.glob("*.json")):
        file_points = parse_data_points(_read_json(path), origin=str(path))
        logger.info("Loaded %d data point(s) from %s", len(file_points), path.name)
        points.extend(file_points)
    return RawDataStore(points)


def load_history(path: Path) -> Dict[str, List[HistoricalScore]]:
    """Load historical composite scores keyed by ISO3 code.

    The file maps each ISO3 code to a list of ``{"year": ..., "score": ...}``
    objects. A missing file simply means no history is available.
    """

    if not path.exists():
        logger.info("No score history found at %s; trends will be stable.", path)
        return {}
    payload = _read_json(path)
    if not isinstance(payload, Mapping):
        raise DataFileError(f"{path} must contain a JSON object keyed by ISO3 code")
    history: Dict[str, List[HistoricalScore]] = {}
    for iso3, entries in payload.items():
        scores: List[HistoricalScore] = []
        for entry in entries or []:
            try:
                scores.append(HistoricalScore(year=int(entry["year"]), score=float(entry["score"])))
            except (KeyError, TypeError, ValueError):
                logger.warning("Ignoring malformed history entry for %s: %s", iso3, entry)
        history[str(iso3).upper()] = scores
    return history


__all__ = [
    "DataFileError",
    "load_data_points",
    "load_history",
    "parse_data_points",
]
