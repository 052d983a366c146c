"""World Fairness Score - composite fairness scoring from international indices."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List

from fairness.core import StageContext, StageRunner, registry
from fairness.core.utils import pipeline_version
from fairness.settings import Settings

if TYPE_CHECKING:
    from fairness.scoring.models import CountryCalculation

logger = logging.getLogger(__name__)

__all__ = [
    "__version__",
    "STAGE_ORDER",
    "StageContext",
    "StageRunner",
    "Settings",
    "registry",
    "bootstrap",
    "calculate",
    "create_default_context",
]

STAGE_ORDER = ("load", "score", "export")


def __getattr__(name: str):  # pragma: no cover - passthrough to package metadata
    if name == "__version__":
        return pipeline_version()
    raise AttributeError(name)


def bootstrap() -> None:
    """Make sure every stage in :data:`STAGE_ORDER` is registered."""

    from fairness import export, ingestion, scoring  # noqa: F401


def create_default_context(settings: Settings | None = None) -> StageContext:
    """Context for a run stamped with the current UTC time."""

    settings = settings or Settings.load()
    settings.ensure_directories()
    started = datetime.utcnow()
    return StageContext(
        settings=settings,
        run_id=started.strftime("%Y%m%d%H%M%S"),
        timestamp=started,
        workspace=Path.cwd(),
    )


def calculate(
    countries: Iterable[str] | None = None,
    *,
    settings: Settings | None = None,
    export: bool = True,
) -> List[CountryCalculation]:
    """Score every country (or just *countries*) and return the ranked results.

    With ``export=False`` only the load and score stages run and no files are
    written.
    """

    bootstrap()
    context = create_default_context(settings)
    if countries:
        context.options["countries"] = list(countries)
    stages = list(STAGE_ORDER if export else STAGE_ORDER[:2])
    logger.info("World Fairness Score %s, run %s", pipeline_version(), context.run_id)
    StageRunner(registry, STAGE_ORDER).run(stages, context)
    return context.artifacts["calculations"]
