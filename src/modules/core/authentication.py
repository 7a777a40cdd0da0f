"""Bearer token authentication for Django REST Framework.

Resolves ``Authorization: Bearer <token>`` to a ``TokenUser`` built from
the access token claims.  Tokens are issued by ``modules.users.tokens``.

Security decisions
------------------
* Requests without an ``Authorization`` header stay anonymous
  (``request.user is None``); no endpoint requires a token.
* A header that is present but malformed, expired or forged answers 401.
* ``algorithms`` is fixed by configuration, never read from the token.
"""

import structlog
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from modules.users.exceptions import InvalidCredentials
from modules.users.tokens import decode_access_token

logger = structlog.get_logger(__name__)


class TokenUser:
    """Lightweight principal for requests carrying a valid access token.

    Views read ``request.user.id`` / ``.roles``; no store lookup happens
    during authentication.
    """

    def __init__(self, payload: dict):
        self.payload = payload
        self.id: str = payload.get("sub", "")
        self.email: str = payload.get("email", "")
        self.roles: frozenset = frozenset(payload.get("roles", []))

    # DRF checks
    is_authenticated = True
    is_active = True

    def has_role(self, role) -> bool:
        return str(role) in self.roles

    def __str__(self) -> str:  # pragma: no cover
        return self.id


class BearerTokenAuthentication(BaseAuthentication):
    """DRF authentication class that validates HS256 Bearer tokens."""

    keyword = "Bearer"

    # ------------------------------------------------------------------
    # Public API (DRF contract)
    # ------------------------------------------------------------------

    def authenticate(self, request):
        """Return ``(TokenUser, token)`` or ``None`` (no credentials)."""
        header = request.META.get("HTTP_AUTHORIZATION", "")
        if not header:
            return None

        token = self._extract_token(header)
        try:
            payload = decode_access_token(token)
        except InvalidCredentials as exc:
            raise AuthenticationFailed(exc.message) from exc

        user = TokenUser(payload)
        logger.info("auth.token_authenticated", user_id=user.id)
        return (user, token)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return f'{self.keyword} realm="api"'

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @classmethod
    def _extract_token(cls, header: str) -> str:
        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != cls.keyword.lower():
            raise AuthenticationFailed("Invalid Authorization header format.")
        return parts[1]
