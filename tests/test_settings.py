from __future__ import annotations

from pathlib import Path

import pytest

from fairness.settings import DEFAULT_COUNTRIES, DEFAULT_METHODOLOGY, Settings

ENV_VARS = (
    "FAIRNESS_DATA_DIR",
    "FAIRNESS_OUTPUT_DIR",
    "FAIRNESS_METHODOLOGY",
    "FAIRNESS_COUNTRIES",
    "FAIRNESS_HISTORY",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_point_at_bundled_files() -> None:
    settings = Settings.load()

    assert settings.data_dir == Path("data")
    assert settings.processed_dir == Path("data") / "processed"
    assert settings.history_path == Path("data") / "history.json"
    assert settings.methodology_path == DEFAULT_METHODOLOGY
    assert settings.countries_path == DEFAULT_COUNTRIES
    assert DEFAULT_METHODOLOGY.exists()
    assert DEFAULT_COUNTRIES.exists()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FAIRNESS_DATA_DIR", str(tmp_path / "in"))
    monkeypatch.setenv("FAIRNESS_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings.load()
    settings.ensure_directories()

    assert settings.history_path == tmp_path / "in" / "history.json"
    assert settings.log_level == "DEBUG"
    assert (tmp_path / "in").is_dir()
    assert (tmp_path / "out").is_dir()
