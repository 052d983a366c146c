"""Fairness data loading stage."""
from __future__ import annotations

import logging

from fairness.core import register_stage
from fairness.core.stage import StageContext

from .countries import load_country_profiles
from .loader import load_data_points, load_history

logger = logging.getLogger(__name__)


@register_stage("load", "Load processed index values, country profiles and score history.")
def run(context: StageContext) -> None:
    """Populate the run artifacts consumed by the scoring stage."""

    settings = context.settings
    logger.info("Loading processed data from %s", settings.processed_dir)
    store = load_data_points(settings.processed_dir)
    profiles = load_country_profiles(settings.countries_path)
    history = load_history(settings.history_path)
    logger.info(
        "Loaded %d data point(s) for %d country(ies); %d reference profile(s), history for %d",
        len(store),
        len(store.countries()),
        len(profiles),
        len(history),
    )
    context.artifacts.update(store=store, profiles=profiles, history=history)
