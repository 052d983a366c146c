"""Fairness scoring stage."""
from __future__ import annotations

import logging

from fairness.core import register_stage
from fairness.core.stage import StageContext

from .pipeline import run_pipeline

logger = logging.getLogger(__name__)


@register_stage("score", "Compute dimension, composite and trend scores per country.")
def run(context: StageContext) -> None:
    """Execute the scoring pipeline over the data loaded earlier in the run."""

    logger.info("Starting scoring with methodology %s", context.settings.methodology_path)
    try:
        summary = run_pipeline(
            methodology_path=context.settings.methodology_path,
            profiles=context.require("profiles"),
            store=context.require("store"),
            history=context.artifacts.get("history"),
            countries=context.options.get("countries"),
            now=context.timestamp,
        )
    except FileNotFoundError as exc:
        logger.error("Methodology file missing: %s", exc)
        raise
    logger.info(
        "Scoring summary: %d country(ies) evaluated, %d with data, %d source value(s), %d estimated",
        summary.countries_evaluated,
        summary.countries_with_data,
        summary.sources_used,
        summary.estimated_fields,
    )
    context.artifacts["calculations"] = summary.calculations
