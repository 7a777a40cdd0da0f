"""User directory service layer.

Registration, credential verification and role checks.  Passwords
are hashed with Django's configured ``PASSWORD_HASHERS``.

Business rules enforced here:
- E-mail must be unique (``UserAlreadyExists``).
- New users get the CUSTOMER role.
- A failed login never reveals whether the e-mail is registered.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.contrib.auth.hashers import check_password, make_password

from modules.users.exceptions import (
    InvalidCredentials,
    UserAlreadyExists,
    UserNotFound,
)
from modules.users.models import User

if TYPE_CHECKING:
    from modules.users.dtos import LoginDTO, RegisterUserDTO, UpdateRolesDTO
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserService:
    """Application service for User use-cases.

    Receives an ``IUserRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def register(self, dto: RegisterUserDTO) -> User:
        """Register a new user with a hashed password.

        Raises:
            UserAlreadyExists: if the e-mail is already taken.
        """
        log = logger.bind(email=dto.email)

        if self._repo.get_by_email(dto.email):
            log.warning("user.duplicate_email")
            raise UserAlreadyExists()

        user = User.new(
            email=dto.email,
            password_hash=make_password(dto.password),
            first_name=dto.first_name,
            last_name=dto.last_name,
        )
        user = self._repo.save(user)
        log.info("user.registered", user_id=user.id)
        return user

    def authenticate(self, dto: LoginDTO) -> User:
        """Verify an e-mail/password pair.

        Raises:
            InvalidCredentials: unknown e-mail or wrong password.
        """
        user = self._repo.get_by_email(dto.email)
        if user is None:
            # Same hashing cost as a wrong password.
            make_password(dto.password)
            logger.warning("user.authentication_failed")
            raise InvalidCredentials()
        if not check_password(dto.password, user.password_hash):
            logger.warning("user.authentication_failed", user_id=user.id)
            raise InvalidCredentials()
        logger.info("user.authenticated", user_id=user.id)
        return user

    def update_roles(self, id: str, dto: UpdateRolesDTO) -> User:
        """Replace the role set of a user with ``dto.roles``.

        Raises:
            UserNotFound: if the user does not exist.
        """
        user = self.get_user(id)
        user = self._repo.save(user.with_roles(dto.roles))
        logger.info("user.roles_updated", user_id=user.id, roles=sorted(user.roles))
        return user

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_user(self, id: str) -> User:
        """Retrieve a single user by ID.

        Raises:
            UserNotFound: if the user does not exist.
        """
        user = self._repo.get_by_id(str(id))
        if not user:
            raise UserNotFound(f"User {id} not found.")
        return user

    def has_role(self, id: str, role: str) -> bool:
        """``True`` if the user exists and holds ``role``."""
        user = self._repo.get_by_id(str(id))
        return bool(user and user.has_role(role))
