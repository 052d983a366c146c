from __future__ import annotations

import pytest

from fairness.core.registry import StageRegistry
from fairness.core.runner import StageRunner
from fairness.core.stage import StageContext


def _dummy_stage(context: StageContext) -> None:
    del context


def _failing_stage(context: StageContext) -> None:
    raise RuntimeError("boom")


def test_registry_prevents_duplicate_registration() -> None:
    registry = StageRegistry()
    registry.register("demo", _dummy_stage)
    with pytest.raises(ValueError):
        registry.register("demo", _dummy_stage)


def test_registry_get_unknown_stage_raises_key_error() -> None:
    with pytest.raises(KeyError):
        StageRegistry().get("missing")


def test_stage_runner_resolve_filters_duplicates() -> None:
    registry = StageRegistry()
    registry.register("one", _dummy_stage)
    registry.register("two", _dummy_stage)
    runner = StageRunner(registry)

    assert runner.resolve(["two", "one", "two"]) == ["two", "one"]
    assert runner.resolve(None) == ["one", "two"]

    with pytest.raises(ValueError):
        runner.resolve(["missing"])


def test_stage_runner_propagates_stage_failures(stage_context: StageContext) -> None:
    registry = StageRegistry()
    registry.register("broken", _failing_stage)

    with pytest.raises(RuntimeError, match="boom"):
        StageRunner(registry).run(["broken"], stage_context)


def test_context_require_reports_missing_artifact(stage_context: StageContext) -> None:
    stage_context.artifacts["store"] = "loaded"

    assert stage_context.require("store") == "loaded"
    with pytest.raises(RuntimeError):
        stage_context.require("calculations")


def test_default_order_wins_over_registration_order() -> None:
    registry = StageRegistry()
    registry.register("score", _dummy_stage)
    registry.register("extra", _dummy_stage)
    registry.register("load", _dummy_stage)
    runner = StageRunner(registry, ("load", "score", "export"))

    assert runner.available() == ["load", "score", "extra"]
    assert runner.resolve([]) == ["load", "score", "extra"]


def test_run_reports_stage_timings(stage_context: StageContext) -> None:
    registry = StageRegistry()
    registry.register("one", _dummy_stage)
    registry.register("two", _dummy_stage)

    timings = StageRunner(registry).run(["two", "one"], stage_context)

    assert [timing.name for timing in timings] == ["two", "one"]
    assert all(timing.seconds >= 0 for timing in timings)


def test_describe_uses_docstring_when_no_description() -> None:
    def documented(context: StageContext) -> None:
        """Write the ranking workbook.

        More detail here.
        """

    registry = StageRegistry()
    registry.register("export", documented)
    registry.register("load", _dummy_stage, description="Load inputs.")

    rows = registry.describe(["load", "export"])

    assert rows[0][:2] == ("load", "Load inputs.")
    assert rows[1][:2] == ("export", "Write the ranking workbook.")
    with pytest.raises(ValueError):
        registry.register(" ", _dummy_stage)
