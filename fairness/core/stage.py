"""Stage primitives for the fairness scoring runtime."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Protocol

from fairness.settings import Settings


class StageCallable(Protocol):
    """Callable protocol for a pipeline stage."""

    def __call__(self, context: "StageContext") -> None:
        """Execute the stage logic."""


@dataclass(slots=True)
class StageContext:
    """Context object passed to every stage run.

    ``artifacts`` carries in-memory results from one stage to the next;
    ``options`` holds selections made on the command line.
    """

    settings: Settings
    run_id: str
    timestamp: datetime
    workspace: Path
    options: Dict[str, Any] = field(default_factory=dict)
    artifacts: Dict[str, Any] = field(default_factory=dict)

    def require(self, key: str) -> Any:
        """Return the artifact stored under *key* by an earlier stage."""

        try:
            return self.artifacts[key]
        except KeyError as exc:
            raise RuntimeError(
                f"Artifact '{key}' is not available; run the stage that produces it first"
            ) from exc


@dataclass(slots=True, frozen=True)
class StageDefinition:
    """Metadata about a registered stage."""

    name: str
    callable: StageCallable
    description: str
    module: str
