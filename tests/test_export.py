from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from openpyxl import load_workbook

from fairness.export.generators import ExportGenerator, presentation_record
from fairness.export.narrative import dimension_label, narrative_facts
from fairness.normalization import SourceConfig
from fairness.scoring.models import HistoricalScore
from fairness.scoring.repository import RawDataStore

NOW = datetime(2025, 6, 1)


def _norway(engine_factory, norway, make_point, history=()):
    engine = engine_factory(
        {
            "democraticVoice": [("freedom_house_political", 1.0)],
            "pressFreedom": [("rsf_press_freedom", 1.0)],
        },
        [
            SourceConfig("freedom_house_political", 0, 40),
            SourceConfig("rsf_press_freedom", 0, 100, invert=True),
        ],
    )
    store = RawDataStore(
        [
            make_point("freedom_house_political", 40),
            make_point("rsf_press_freedom", 7.04, estimated=True),
        ]
    )
    return engine.calculate_country(norway, store.for_country("NOR"), history, now=NOW)


def test_dimension_label() -> None:
    assert dimension_label("pressFreedom") == "press freedom"
    assert dimension_label("governmentResponsiveness") == "government responsiveness"


def test_narrative_facts(engine_factory, norway, make_point) -> None:
    calculation = _norway(engine_factory, norway, make_point, [HistoricalScore(2020, 75)])

    facts = narrative_facts(calculation)

    assert facts[0] == "Norway scores highest on democratic voice (100/100)."
    assert facts[1] == "Its weakest dimension is press freedom (93/100)."
    assert "Score declined by 11 points over 5 years." in facts
    assert "1 of 2 source values are estimates." in facts
    assert facts[-1] == "Data coverage is limited; treat this score with caution."


def test_narrative_facts_without_data(engine_factory, norway) -> None:
    calculation = engine_factory().calculate_country(norway, {}, now=NOW)

    assert narrative_facts(calculation) == [
        "No source data is available for Norway; all dimensions use the neutral default."
    ]


def test_presentation_record_is_keyed_by_id(engine_factory, norway, make_point) -> None:
    record = presentation_record(_norway(engine_factory, norway, make_point))

    assert record["id"] == "NOR"
    assert "iso3" not in record
    assert record["fairnessScore"] == 64
    assert record["dimensions"]["pressFreedom"] == 93.0
    assert record["gdpPerCapita"] == 89154
    assert record["trend"] == {"direction": "stable", "change": 0, "yearsCompared": 0}


def test_generator_writes_all_artifacts(
    tmp_path: Path, engine_factory, norway, make_point
) -> None:
    calculation = _norway(engine_factory, norway, make_point)
    generator = ExportGenerator(tmp_path / "out")

    summary = generator.generate("run1", [calculation])

    assert summary.countries == 1
    assert [path.name for path in summary.files] == [
        "fairness_detailed_run1.json",
        "fairness_scores_run1.json",
        "fairness_rankings_run1.xlsx",
    ]
    detailed = json.loads(summary.files[0].read_text(encoding="utf-8"))
    assert detailed[0]["iso3"] == "NOR"
    assert detailed[0]["metadata"]["estimatedFields"] == 1
    assert detailed[0]["dimensions"]["pressFreedom"]["sources"][0]["estimated"] is True

    workbook = load_workbook(summary.files[2])
    assert workbook.sheetnames == ["Rankings", "Dimensions"]
    rankings = list(workbook["Rankings"].iter_rows(values_only=True))
    assert rankings[0][:3] == ("rank", "iso3", "name")
    assert rankings[1][:5] == (1, "NOR", "Norway", "europe", 64)


def test_generator_skips_empty_runs(tmp_path: Path) -> None:
    summary = ExportGenerator(tmp_path / "out").generate("run1", [])

    assert summary.countries == 0
    assert summary.files == []
    assert not (tmp_path / "out").exists()
