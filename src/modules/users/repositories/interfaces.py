"""User repository interface.

Extends ``IRepository[User]`` with the e-mail lookup required by
registration and authentication.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.users.models import User


class IUserRepository(IRepository["User"]):
    """Repository contract for the User aggregate.

    ``save`` must reject a user whose e-mail belongs to a different id
    with ``UserAlreadyExists``, atomically with the write.
    """

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by (normalised) e-mail address."""
