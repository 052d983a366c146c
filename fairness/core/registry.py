"""Registry of the stages that make up a fairness run."""
from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Tuple

from .stage import StageCallable, StageDefinition


def _summary(func: StageCallable) -> str:
    lines = (func.__doc__ or "").strip().splitlines()
    return lines[0] if lines else ""


class StageRegistry:
    def __init__(self) -> None:
        self._stages: Dict[str, StageDefinition] = {}

    def register(self, name: str, func: StageCallable, description: str = "") -> StageCallable:
        """Add *func* under *name* and hand it back so this works as a decorator."""

        if not name or not name.strip():
            raise ValueError("Stage name must not be empty")
        if name in self._stages:
            existing = self._stages[name].module
            raise ValueError(f"Stage '{name}' is already registered by {existing}")
        self._stages[name] = StageDefinition(
            name=name,
            callable=func,
            description=description or _summary(func),
            module=func.__module__,
        )
        return func

    def get(self, name: str) -> StageDefinition:
        try:
            return self._stages[name]
        except KeyError as exc:
            raise KeyError(f"Stage '{name}' is not registered") from exc

    def names(self) -> List[str]:
        return list(self._stages)

    def describe(self, order: List[str] | None = None) -> List[Tuple[str, str, str]]:
        """``(name, description, module)`` rows, in *order* when given."""

        names = order if order is not None else self.names()
        return [
            (definition.name, definition.description, definition.module)
            for definition in (self.get(name) for name in names)
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._stages

    def __iter__(self) -> Iterator[StageDefinition]:
        return iter(self._stages.values())

    def __len__(self) -> int:
        return len(self._stages)


registry = StageRegistry()


def register_stage(name: str, description: str = "") -> Callable[[StageCallable], StageCallable]:
    """Decorator form of :meth:`StageRegistry.register` on the shared registry."""

    def decorator(func: StageCallable) -> StageCallable:
        return registry.register(name, func, description=description)

    return decorator
