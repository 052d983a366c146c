from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, Sequence, Tuple

import pytest

from fairness.core.stage import StageContext
from fairness.normalization.sources import SourceCatalog, SourceConfig
from fairness.scoring.config import (
    CANONICAL_DIMENSIONS,
    DimensionRule,
    Methodology,
    SourceWeight,
)
from fairness.scoring.engine import FairnessEngine
from fairness.scoring.models import CountryProfile, RawDataPoint
from fairness.settings import DEFAULT_COUNTRIES, DEFAULT_METHODOLOGY, Settings

CANONICAL_WEIGHTS: Dict[str, float] = {
    "democraticVoice": 0.15,
    "pressFreedom": 0.15,
    "justiceAccess": 0.15,
    "economicOpportunity": 0.10,
    "workplaceRights": 0.10,
    "healthcareAccess": 0.10,
    "housingSecurity": 0.10,
    "consumerProtection": 0.05,
    "governmentResponsiveness": 0.05,
    "socialInclusion": 0.05,
}

DimensionSources = Sequence[Tuple[str, float] | Tuple[str, float, str]]


def _build_methodology(
    dimensions: Mapping[str, DimensionSources] | None = None,
    sources: Iterable[SourceConfig] | None = None,
) -> Methodology:
    catalog = list(sources or [])
    catalog.append(SourceConfig("unused_index", 0.0, 100.0))
    rules = {}
    for name in CANONICAL_DIMENSIONS:
        entries = (dimensions or {}).get(name, [("unused_index", 1.0)])
        rules[name] = DimensionRule(
            name=name,
            sources=tuple(SourceWeight(*entry) for entry in entries),
        )
    return Methodology(
        version="test",
        dimension_weights=dict(CANONICAL_WEIGHTS),
        sources=SourceCatalog(catalog),
        dimensions=rules,
    )


@pytest.fixture
def methodology_factory() -> Callable[..., Methodology]:
    """Build a ten-dimension methodology; unlisted dimensions use a source nobody reports."""

    return _build_methodology


@pytest.fixture
def engine_factory(methodology_factory) -> Callable[..., FairnessEngine]:
    def factory(*args, **kwargs) -> FairnessEngine:
        return FairnessEngine(methodology_factory(*args, **kwargs))

    return factory


@pytest.fixture
def norway() -> CountryProfile:
    return CountryProfile(
        iso3="NOR",
        name="Norway",
        region="europe",
        subregion="nordic",
        population=5.5,
        gdp_per_capita=89154,
    )


def point(
    source_id: str,
    value: float,
    *,
    country: str = "NOR",
    field: str | None = None,
    estimated: bool = False,
    year: int = 2024,
) -> RawDataPoint:
    return RawDataPoint(
        country=country,
        source_id=source_id,
        value=value,
        year=year,
        field=field,
        estimated=estimated,
    )


@pytest.fixture
def make_point() -> Callable[..., RawDataPoint]:
    return point


@pytest.fixture
def stage_context(tmp_path: Path) -> StageContext:
    """Create a temporary stage context for tests."""

    settings = Settings(
        data_dir=tmp_path / "data",
        output_dir=tmp_path / "artifacts",
        methodology_path=DEFAULT_METHODOLOGY,
        countries_path=DEFAULT_COUNTRIES,
        history_path=tmp_path / "data" / "history.json",
        log_level="INFO",
    )
    settings.ensure_directories()
    return StageContext(
        settings=settings,
        run_id="test-run",
        timestamp=datetime(2025, 1, 1, 12, 0, 0),
        workspace=tmp_path,
    )
