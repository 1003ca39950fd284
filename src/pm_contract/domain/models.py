"""Domain models for pm_contract — pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TaggedVariant:
    """Normalized contract enum value: Resolved(Yes) -> tag='Resolved', values=[...]."""

    tag: str
    values: list[Any] = field(default_factory=list)

    @property
    def first(self) -> Any:
        return self.values[0] if self.values else None
