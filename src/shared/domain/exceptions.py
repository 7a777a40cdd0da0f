"""Domain error kinds shared by every bounded context.

Each module raises subclasses of these (``ProductNotFound``,
``InvalidTransition`` ...).  The API layer maps a kind to its
``status_code`` and renders the ``{message, code}`` envelope.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for business-rule violations."""

    status_code: int = 400
    default_message: str = "Business rule violated."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidData(DomainError):
    """Missing or invalid input fields."""

    default_message = "Invalid data."


class NotFound(DomainError):
    """An identifier does not resolve to an entity."""

    status_code = 404
    default_message = "Resource not found."


class Conflict(DomainError):
    """The request conflicts with the current state of a resource."""

    status_code = 409
    default_message = "Conflict with current state."


class AuthenticationFailure(DomainError):
    """Credentials could not be verified."""

    status_code = 401
    default_message = "Authentication failed."
