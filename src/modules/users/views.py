"""User directory API views.

Registration and login only; role management is reached through the
service layer.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.container import get_container
from modules.core.utils import json_object
from modules.users.dtos import LoginDTO, RegisterUserDTO
from modules.users.serializers import LoginResponseSerializer, UserSerializer
from modules.users.tokens import issue_access_token


class UserViewSet(ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_container().user_service

    def register(self, request: Request) -> Response:
        """POST /users/register"""
        data = json_object(request)
        dto = RegisterUserDTO(
            email=data.get("email") or "",
            password=data.get("password") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
        )
        user = self._service.register(dto)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def login(self, request: Request) -> Response:
        """POST /users/login

        Returns the user and a bearer access token.  Any credential
        mismatch answers 401 with the same message.
        """
        data = json_object(request)
        dto = LoginDTO(
            email=data.get("email") or "",
            password=data.get("password") or "",
        )
        user = self._service.authenticate(dto)
        payload = {
            "user": user,
            "access_token": issue_access_token(user),
            "token_type": "Bearer",
        }
        return Response(LoginResponseSerializer(payload).data)
