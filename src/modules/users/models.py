"""Bakery staff account.

Extends Django's ``AbstractUser`` with a ``role`` and a ``locked`` flag.
Locked accounts (e.g. the seeded administrator) can be read but never
modified or deleted through the application; see ``UserService``.
"""

from __future__ import annotations

import uuid6
from django.contrib.auth.models import AbstractUser
from django.db import models

from modules.users.constants import Role


class User(AbstractUser):
    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.BARISTA,
    )
    locked = models.BooleanField(default=False)

    class Meta(AbstractUser.Meta):
        db_table = "users"
        ordering = ["username"]

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"
