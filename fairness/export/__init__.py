"""Fairness export stage."""
from __future__ import annotations

import logging

from fairness.core import register_stage
from fairness.core.stage import StageContext

from .generators import ExportGenerator, log_rankings

logger = logging.getLogger(__name__)


@register_stage("export", "Write detailed, presentation and ranking artifacts.")
def run(context: StageContext) -> None:
    """Serialize the calculations produced by the scoring stage."""

    calculations = context.require("calculations")
    log_rankings(calculations)
    generator = ExportGenerator(context.settings.output_dir)
    summary = generator.generate(context.run_id, calculations)
    if summary.countries == 0:
        logger.warning(
            "No calculations available for export in run %s; skipping file generation.",
            context.run_id,
        )
        return
    logger.info("Exported %d country result(s) for run %s.", summary.countries, context.run_id)
    for artifact in summary.files:
        logger.info("Export artifact written to %s", artifact)
