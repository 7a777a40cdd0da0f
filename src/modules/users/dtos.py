"""User DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, field_validator

from modules.users.constants import Role


def _normalise_email(v: str) -> str:
    v = (v or "").strip().lower()
    local, _, domain = v.partition("@")
    if not local or "." not in domain:
        raise ValueError("Email must be a valid address.")
    return v


class RegisterUserDTO(BaseModel):
    """Immutable DTO for user registration.

    Validates:
    - ``email`` looks like an address; normalised to lower case.
    - ``password`` is not blank.
    """

    model_config = ConfigDict(frozen=True)

    email: str
    password: str
    first_name: str = ""
    last_name: str = ""

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        return _normalise_email(v)

    @field_validator("password")
    @classmethod
    def password_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Password must not be empty.")
        return v


class LoginDTO(BaseModel):
    """Immutable DTO for credential verification."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_is_normalised(cls, v: str) -> str:
        return (v or "").strip().lower()

    @field_validator("email", "password")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Email and password are required.")
        return v


class UpdateRolesDTO(BaseModel):
    """Immutable DTO replacing the role set of a user."""

    model_config = ConfigDict(frozen=True)

    roles: List[Role]

    @field_validator("roles")
    @classmethod
    def roles_must_not_be_empty(cls, v: List[Role]) -> List[Role]:
        if not v:
            raise ValueError("A user needs at least one role.")
        return v
