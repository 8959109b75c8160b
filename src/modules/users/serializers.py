"""User DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.users.models import User


class UserSerializer(serializers.ModelSerializer):
    """Read/write serializer for staff accounts.

    ``password`` is write-only and optional on update; ``locked`` can only
    be set through the database or the seed command.
    """

    password = serializers.CharField(
        write_only=True, required=False, min_length=8, trim_whitespace=False
    )

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "role",
            "locked",
            "password",
        ]
        read_only_fields = ["id", "locked"]

    def apply_to(self, user: User) -> User:
        """Copy validated data onto *user* without saving it."""
        data = dict(self.validated_data)
        password = data.pop("password", None)
        for field, value in data.items():
            setattr(user, field, value)
        if password:
            user.set_password(password)
        return user
