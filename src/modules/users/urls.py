"""User URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.users.views import UserViewSet

urlpatterns = [
    path(
        "users/register",
        UserViewSet.as_view({"post": "register"}),
        name="user-register",
    ),
    path("users/login", UserViewSet.as_view({"post": "login"}), name="user-login"),
]
