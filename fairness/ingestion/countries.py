from __future__ import annotations

"""Country reference table used to label scored countries."""

import csv
import logging
from pathlib import Path
from typing import List

from fairness.scoring.models import CountryProfile

logger = logging.getLogger(__name__)


def _optional_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def load_country_profiles(path: Path) -> List[CountryProfile]:
    """Load country profiles from the CSV reference table at *path*.

    Population is expressed in millions and GDP per capita in current USD.
    """

    if not path.exists():
        raise FileNotFoundError(f"Country reference table not found at {path}")
    profiles: List[CountryProfile] = []
    seen: set[str] = set()
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            iso3 = (row.get("iso3") or "").strip().upper()
            if len(iso3) != 3:
                logger.warning("Skipping country row without a valid ISO3 code: %s", row)
                continue
            if iso3 in seen:
                logger.warning("Country %s listed more than once; keeping the first row.", iso3)
                continue
            seen.add(iso3)
            profiles.append(
                CountryProfile(
                    iso3=iso3,
                    name=(row.get("name") or iso3).strip(),
                    region=(row.get("region") or "").strip(),
                    subregion=(row.get("subregion") or "").strip(),
                    population=_optional_float(row.get("population")),
                    gdp_per_capita=_optional_float(row.get("gdp_per_capita")),
                )
            )
    return profiles


__all__ = ["load_country_profiles"]
