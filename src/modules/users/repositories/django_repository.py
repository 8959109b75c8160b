"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q

from modules.core.pagination import paginate
from modules.users.models import User
from modules.users.repositories.interfaces import IUserRepository

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest

logger = structlog.get_logger(__name__)


def _matching(text: str) -> Q:
    return (
        Q(email__icontains=text)
        | Q(first_name__icontains=text)
        | Q(last_name__icontains=text)
        | Q(role__icontains=text)
    )


class UserDjangoRepository(IUserRepository):
    """Concrete User repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[User]:
        try:
            return User.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def find_all(self, page_request: PageRequest) -> Page:
        return paginate(User.objects.all(), page_request)

    def find_matching(self, text: str, page_request: PageRequest) -> Page:
        return paginate(User.objects.filter(_matching(text)), page_request)

    def count_matching(self, text: str) -> int:
        return User.objects.filter(_matching(text)).count()

    def count(self) -> int:
        return User.objects.count()

    @transaction.atomic
    def save(self, entity: User) -> User:
        entity.save()
        logger.info("user.saved", user_id=str(entity.id), role=entity.role)
        return entity

    @transaction.atomic
    def delete(self, entity: User) -> None:
        user_id = str(entity.id)
        entity.delete()
        logger.info("user.deleted", user_id=user_id)
