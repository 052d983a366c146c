from __future__ import annotations

"""Source definitions describing the native scale of each index."""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List


class ConfigurationError(ValueError):
    """Raised when static scoring configuration is unusable."""


@dataclass(slots=True, frozen=True)
class SourceConfig:
    """Native input range of an external index.

    ``invert`` marks indices where a lower raw value is the better outcome
    (corruption, inequality, rights-violation ratings).
    """

    source_id: str
    min_value: float
    max_value: float
    invert: bool = False
    name: str | None = None
    description: str | None = None

    @property
    def span(self) -> float:
        return self.max_value - self.min_value

    def validate(self) -> None:
        if not self.min_value < self.max_value:
            raise ConfigurationError(
                f"Source '{self.source_id}' declares an empty input range "
                f"[{self.min_value}, {self.max_value}]"
            )


class SourceCatalog:
    """Lookup helper for source configurations."""

    def __init__(self, sources: Iterable[SourceConfig]):
        self._definitions: Dict[str, SourceConfig] = {}
        for source in sources:
            if source.source_id in self._definitions:
                raise ConfigurationError(f"Source '{source.source_id}' is declared twice")
            self._definitions[source.source_id] = source

    def __iter__(self) -> Iterator[SourceConfig]:
        return iter(self._definitions.values())

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def by_id(self, source_id: str) -> SourceConfig | None:
        return self._definitions.get(source_id)

    def values(self) -> List[SourceConfig]:
        return list(self._definitions.values())

    def validate(self) -> None:
        """Check every declared range before any value is normalized."""

        for source in self._definitions.values():
            source.validate()


__all__ = ["ConfigurationError", "SourceCatalog", "SourceConfig"]
