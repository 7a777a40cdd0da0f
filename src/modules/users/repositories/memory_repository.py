"""In-memory implementation of the User repository."""

from __future__ import annotations

from typing import Dict, Optional

from modules.core.repositories.memory import InMemoryRepository
from modules.users.exceptions import UserAlreadyExists
from modules.users.models import User
from modules.users.repositories.interfaces import IUserRepository


class InMemoryUserRepository(InMemoryRepository[User], IUserRepository):
    """Concrete User repository with a secondary e-mail index."""

    def __init__(self) -> None:
        super().__init__()
        self._ids_by_email: Dict[str, str] = {}

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._ids_by_email.get(email)
            return self._items.get(user_id) if user_id else None

    def save(self, entity: User) -> User:
        with self._lock:
            owner = self._ids_by_email.get(entity.email)
            if owner is not None and owner != entity.id:
                raise UserAlreadyExists()
            previous = self._items.get(entity.id)
            if previous is not None and previous.email != entity.email:
                del self._ids_by_email[previous.email]
            self._items[entity.id] = entity
            self._ids_by_email[entity.email] = entity.id
        return entity

    def delete(self, id: str) -> bool:
        with self._lock:
            user = self._items.pop(str(id), None)
            if user is None:
                return False
            self._ids_by_email.pop(user.email, None)
            return True
