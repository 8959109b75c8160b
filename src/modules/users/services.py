"""User administration service.

Governance rules layered in front of the generic ``CrudService``:
- A locked account can never be saved or deleted.
- Nobody can delete their own account (checked before the lock).
- An account still referenced by orders cannot be deleted.

Guards are pure precondition checks: a denial never reaches the store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db.models import ProtectedError

from modules.core.exceptions import PolicyDenied
from modules.core.services import CrudService
from modules.users.constants import (
    DELETING_SELF_NOT_PERMITTED,
    MODIFY_LOCKED_USER_NOT_PERMITTED,
)
from modules.users.exceptions import UserNotFound
from modules.users.models import User

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)

USER_IN_USE = "User is referenced by existing orders and cannot be deleted"


class UserService:
    """Application service for staff accounts.

    Receives an ``IUserRepository`` via constructor injection and wraps it
    in a ``CrudService`` (composition, not inheritance).
    """

    def __init__(self, repository: IUserRepository) -> None:
        self._crud: CrudService[User] = CrudService(
            repository, factory=User, not_found=UserNotFound
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_any_matching(
        self, text_filter: Optional[str], page_request: PageRequest
    ) -> Page:
        return self._crud.find_any_matching(text_filter, page_request)

    def count_any_matching(self, text_filter: Optional[str]) -> int:
        return self._crud.count_any_matching(text_filter)

    def load(self, id: str) -> User:
        return self._crud.load(id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_new(self, current_user: User) -> User:
        return self._crud.create_new(current_user)

    def save(self, current_user: User, entity: User) -> User:
        self._throw_if_user_locked(entity)
        return self._crud.save(current_user, entity)

    def delete(self, current_user: User, user_to_delete: User) -> None:
        self._throw_if_deleting_self(current_user, user_to_delete)
        self._throw_if_user_locked(user_to_delete)
        try:
            self._crud.delete(current_user, user_to_delete)
        except ProtectedError:
            logger.warning(
                "user.delete_denied", user_id=str(user_to_delete.pk), reason="in_use"
            )
            raise PolicyDenied(USER_IN_USE) from None

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    @staticmethod
    def _throw_if_deleting_self(current_user: User, user: User) -> None:
        if current_user == user:
            logger.warning("user.delete_denied", user_id=str(user.pk), reason="self")
            raise PolicyDenied(DELETING_SELF_NOT_PERMITTED)

    @staticmethod
    def _throw_if_user_locked(entity: Optional[User]) -> None:
        if entity is not None and entity.locked:
            logger.warning(
                "user.modify_denied", user_id=str(entity.pk), reason="locked"
            )
            raise PolicyDenied(MODIFY_LOCKED_USER_NOT_PERMITTED)
