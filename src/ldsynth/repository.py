"""Base class for scaffolded repositories.

Generated ``<Name>Repository`` classes carry no behaviour of their own;
hand-written operations belong on a subclass or a wrapper holding the
generated repository.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")


class Entity:
    """Marker base for classes that should get a scaffolded repository."""


@dataclass
class RepositoryBase(Generic[T]):
    items: List[T] = field(default_factory=list)
    journal: List[Tuple[str, str]] = field(default_factory=list)

    def _record(self, operation: str, entity: T) -> None:
        self.journal.append((operation, type(entity).__name__))

    def add(self, entity: T) -> None:
        self.items.append(entity)
        self._record("add", entity)

    def delete(self, entity: T) -> None:
        self.items = [item for item in self.items if item is not entity]
        self._record("delete", entity)

    def update(self, entity: T) -> None:
        self.items = [entity if item is entity else item for item in self.items]
        self._record("update", entity)
