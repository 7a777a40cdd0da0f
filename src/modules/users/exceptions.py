"""User directory exceptions.

Raised by the Service Layer when business rules are violated.
The API layer renders them through the shared exception handler.
"""

from __future__ import annotations

from shared.domain.exceptions import AuthenticationFailure, Conflict, NotFound


class UserAlreadyExists(Conflict):
    """A user with the same email is already registered."""

    default_message = "Email already registered."


class UserNotFound(NotFound):
    """The requested user does not exist."""

    default_message = "User not found."


class InvalidCredentials(AuthenticationFailure):
    """Email/password pair did not match.

    The message is identical whether the email is unknown or the
    password is wrong.
    """

    default_message = "Invalid email or password."
