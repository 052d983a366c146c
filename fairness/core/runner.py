"""Sequential stage runner used by the command line."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .registry import StageRegistry
from .stage import StageContext

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class StageTiming:
    name: str
    seconds: float


class StageRunner:
    """Execute registered stages in order against one shared context.

    ``default_order`` is used when no stages are requested explicitly;
    registration order depends on import order and is not a pipeline order.
    """

    def __init__(self, registry: StageRegistry, default_order: Sequence[str] = ()) -> None:
        self._registry = registry
        self._default_order = tuple(default_order)

    def available(self) -> List[str]:
        ordered = [name for name in self._default_order if name in self._registry]
        return ordered + [name for name in self._registry.names() if name not in ordered]

    def run(self, stages: Sequence[str], context: StageContext) -> List[StageTiming]:
        """Run each stage in *stages*; a failing stage stops the run."""

        timings: List[StageTiming] = []
        for name in stages:
            definition = self._registry.get(name)
            stage_logger = logging.getLogger(definition.module)
            stage_logger.info("Starting stage '%s' (run_id=%s)", definition.name, context.run_id)
            started = time.perf_counter()
            try:
                definition.callable(context)
            except Exception:
                stage_logger.exception(
                    "Stage '%s' failed in run %s", definition.name, context.run_id
                )
                raise
            elapsed = time.perf_counter() - started
            stage_logger.info("Completed stage '%s' in %.2fs", definition.name, elapsed)
            timings.append(StageTiming(definition.name, elapsed))

        if timings:
            logger.info(
                "Run %s finished: %s",
                context.run_id,
                ", ".join(f"{timing.name} {timing.seconds:.2f}s" for timing in timings),
            )
        return timings

    def resolve(self, requested: Iterable[str] | None) -> List[str]:
        """Validate *requested* stage names, dropping repeats."""

        requested = list(requested or [])
        if not requested:
            return self.available()
        unknown = [name for name in requested if name not in self._registry]
        if unknown:
            raise ValueError(f"Unknown stages requested: {', '.join(unknown)}")
        return list(dict.fromkeys(requested))
