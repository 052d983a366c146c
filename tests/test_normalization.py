from __future__ import annotations

import pytest

from fairness.core.utils import round_half_up
from fairness.normalization import (
    ConfigurationError,
    SourceCatalog,
    SourceConfig,
    normalize,
    normalize_score,
    normalize_whole,
)


def test_endpoints_map_to_scale_bounds() -> None:
    config = SourceConfig("freedom_house_political", 0, 40)

    assert normalize_score(0, config) == 0.0
    assert normalize_score(40, config) == 100.0
    assert normalize_score(20, config) == 50.0


def test_inverted_source_rewards_low_values() -> None:
    config = SourceConfig("rsf_press_freedom", 0, 100, invert=True)

    assert normalize_score(0, config) == 100.0
    assert normalize_score(100, config) == 0.0
    assert normalize_score(7.04, config) == 93.0


def test_out_of_range_values_are_clamped() -> None:
    config = SourceConfig("wgi_voice_accountability", -2.5, 2.5)

    assert normalize_score(3.7, config) == 100.0
    assert normalize_score(-9, config) == 0.0
    # clamping is idempotent
    assert normalize_score(2.5, config) == normalize_score(3.7, config)


@pytest.mark.parametrize("value", [-50, -0.3, 0, 12.34, 99.99, 100, 1e6])
def test_result_stays_within_scale(value: float) -> None:
    config = SourceConfig("gini_index", 20, 65, invert=True)
    result = normalize_score(value, config)

    assert 0.0 <= result <= 100.0


def test_precision_controls_rounding() -> None:
    config = SourceConfig("hdi", 0, 3)

    assert normalize_score(1, config) == 33.3
    assert normalize_whole(1, config) == 33
    assert normalize(2, config, precision=2) == 66.67


def test_rounding_is_half_up() -> None:
    config = SourceConfig("demo", 0, 8)

    assert normalize_whole(1, config) == 13
    assert round_half_up(2.5) == 3.0
    assert round_half_up(-2.5) == -2.0


@pytest.mark.parametrize("bounds", [(10, 10), (5, 1)])
def test_empty_range_is_rejected(bounds) -> None:
    config = SourceConfig("broken", *bounds)

    with pytest.raises(ConfigurationError):
        normalize_score(5, config)
    with pytest.raises(ConfigurationError):
        config.validate()


def test_catalog_rejects_duplicate_sources() -> None:
    with pytest.raises(ConfigurationError):
        SourceCatalog([SourceConfig("hdi", 0, 1), SourceConfig("hdi", 0, 1)])


def test_catalog_lookup() -> None:
    catalog = SourceCatalog([SourceConfig("hdi", 0, 1), SourceConfig("cpi", 0, 100)])

    assert "hdi" in catalog
    assert len(catalog) == 2
    assert catalog.by_id("cpi").max_value == 100
    assert catalog.by_id("missing") is None


def test_nan_is_rejected_not_clamped() -> None:
    plain = SourceConfig("ti_cpi", 0, 100)
    inverted = SourceConfig("undp_gii", 0, 1, invert=True)

    with pytest.raises(ValueError, match="NaN"):
        normalize_score(float("nan"), plain)
    with pytest.raises(ValueError, match="NaN"):
        normalize_score(float("nan"), inverted)
    assert normalize_score(float("inf"), plain) == 100.0
