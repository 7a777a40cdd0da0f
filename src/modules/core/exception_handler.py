"""DRF exception handler rendering the ``{message, code}`` envelope.

``code`` repeats the HTTP status.  Domain errors carry their own
status; pydantic and serializer validation errors answer 400; anything
else is logged and answers 500 without leaking details.
"""

from __future__ import annotations

from typing import Any

import structlog
from django.http import Http404
from pydantic import ValidationError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response

from shared.domain.exceptions import DomainError

logger = structlog.get_logger(__name__)


def api_exception_handler(exc: Exception, context: dict) -> Response:
    if isinstance(exc, DomainError):
        return error_response(exc.message, exc.status_code)

    if isinstance(exc, ValidationError):
        return error_response(_pydantic_message(exc), status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, Http404):
        return error_response("Resource not found.", status.HTTP_404_NOT_FOUND)

    if isinstance(exc, APIException):
        response = error_response(_flatten(exc.detail), exc.status_code)
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            response["WWW-Authenticate"] = auth_header
        return response

    view = context.get("view")
    logger.error(
        "api.unhandled_error",
        view=type(view).__name__ if view is not None else None,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(
        "Internal server error.", status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def error_response(message: str, code: int) -> Response:
    return Response({"message": message, "code": code}, status=code)


def _pydantic_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        msg = error["msg"]
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        loc = ".".join(str(part) for part in error["loc"])
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def _flatten(detail: Any, prefix: str = "") -> str:
    """Join DRF error details (str, list or nested dict) into one line."""
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            name = f"{prefix}.{field}" if prefix else str(field)
            if field == "non_field_errors":
                name = prefix
            parts.append(_flatten(value, name))
        return "; ".join(part for part in parts if part)
    if isinstance(detail, list):
        parts = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                parts.append(_flatten(value, f"{prefix}.{index}" if prefix else str(index)))
            else:
                parts.append(_flatten(value, prefix))
        return "; ".join(part for part in parts if part)
    if not detail:
        return ""
    return f"{prefix}: {detail}" if prefix else str(detail)
