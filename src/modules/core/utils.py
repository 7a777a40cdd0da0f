"""Small helpers shared by the API views."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rest_framework.request import Request

from shared.domain.exceptions import InvalidData


def json_object(request: Request) -> Mapping[str, Any]:
    """Return the parsed request body, which must be a JSON object."""
    data = request.data
    if not isinstance(data, Mapping):
        raise InvalidData("Request body must be a JSON object.")
    return data
