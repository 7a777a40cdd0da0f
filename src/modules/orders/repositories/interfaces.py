"""Order repository interface.

Extends ``IRepository[Order]`` with the user index and the per-order
lock required by status transitions.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, ContextManager, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    ``list`` and ``list_by_user`` return orders newest first.
    """

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[Order]:
        """All orders placed by ``user_id``; empty list if none."""

    @abstractmethod
    def locked(self, id: str) -> ContextManager[Optional[Order]]:
        """Hold an exclusive lock on one order for a read-modify-write.

        Yields the current order, or ``None`` if it does not exist.
        Other callers of ``locked`` for the same id wait until the
        block exits; plain reads are never blocked.
        """
