"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on a concrete store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``, ``Order``).  Entities are immutable
    values keyed by a string ``id``; saving replaces the stored value.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its identifier."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """List entities whose attributes equal every value in ``filters``."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or replace) an entity."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Remove an entity by ID.  Returns ``False`` if it did not exist."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored entities."""
