"""Access tokens for authenticated users (PyJWT, HS256 by default).

Tokens are signed with ``SECRET_KEY``.  The ``algorithms`` list passed
to ``decode`` is always the configured one, never read from the token.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict

import jwt as pyjwt
import structlog
from django.conf import settings
from django.utils import timezone
from jwt.exceptions import PyJWTError

from modules.users.exceptions import InvalidCredentials
from modules.users.models import User

logger = structlog.get_logger(__name__)

TOKEN_TYPE = "access"


def issue_access_token(user: User) -> str:
    """Return a signed access token whose subject is the user id."""
    now = timezone.now()
    payload = {
        "sub": user.id,
        "email": user.email,
        "roles": sorted(user.roles),
        "type": TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_LIFETIME_MINUTES),
    }
    return pyjwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature, expiry and type of an access token.

    Raises:
        InvalidCredentials: the token is malformed, expired or forged.
    """
    try:
        payload = pyjwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except PyJWTError as exc:
        logger.warning("token.validation_failed", error=str(exc))
        raise InvalidCredentials("Invalid or expired access token.") from exc
    if payload.get("type") != TOKEN_TYPE:
        raise InvalidCredentials("Invalid or expired access token.")
    return payload
