"""User repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IFilterableRepository

if TYPE_CHECKING:
    from modules.users.models import User


class IUserRepository(IFilterableRepository["User"]):
    """Repository contract for staff accounts.

    Free-text search matches email, first name, last name or role.
    """
