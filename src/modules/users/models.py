"""User entity.

``password_hash`` holds a Django password hash (``make_password``);
the raw password never leaves the service layer.  Roles are a frozen
set so a ``User`` value can be shared between threads safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable

import uuid6
from django.utils import timezone

from modules.users.constants import DEFAULT_ROLES


@dataclass(frozen=True)
class User:
    id: str
    email: str
    password_hash: str = field(repr=False)
    first_name: str = ""
    last_name: str = ""
    roles: frozenset[str] = DEFAULT_ROLES
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def new(
        cls,
        email: str,
        password_hash: str,
        first_name: str = "",
        last_name: str = "",
    ) -> User:
        now = timezone.now()
        return cls(
            id=str(uuid6.uuid7()),
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            created_at=now,
            updated_at=now,
        )

    def has_role(self, role: str) -> bool:
        return str(role) in self.roles

    def with_roles(self, roles: Iterable[str]) -> User:
        return replace(
            self, roles=frozenset(str(r) for r in roles), updated_at=timezone.now()
        )

    def __str__(self) -> str:
        return self.email
