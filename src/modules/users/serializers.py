"""User DRF serializers for API output.

The password hash is never part of any representation.
"""

from __future__ import annotations

from rest_framework import serializers


class UserSerializer(serializers.Serializer):
    """Read serializer for the User resource."""

    id = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    first_name = serializers.CharField(read_only=True)
    last_name = serializers.CharField(read_only=True)
    roles = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(read_only=True)

    def get_roles(self, user) -> list[str]:
        return sorted(user.roles)


class LoginResponseSerializer(serializers.Serializer):
    """Authenticated user plus a bearer access token."""

    user = UserSerializer(read_only=True)
    access_token = serializers.CharField(read_only=True)
    token_type = serializers.CharField(read_only=True, default="Bearer")
