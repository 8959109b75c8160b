"""User domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import EntityNotFound


class UserNotFound(EntityNotFound):
    """The requested user account does not exist."""
