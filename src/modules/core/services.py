"""Generic CRUD service.

One implementation of create/read/update/delete with an optional text
filter and paging, shared by the product catalogue and user
administration.  Domain services *compose* a ``CrudService`` and add their
own rules in front of it instead of subclassing it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, Optional, Type, TypeVar

import structlog
from django.db import transaction

from modules.core.exceptions import EntityNotFound

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest
    from modules.core.repositories.interfaces import IFilterableRepository

T = TypeVar("T")

logger = structlog.get_logger(__name__)


def has_text(value: Optional[str]) -> bool:
    """A filter counts as present only when it is a non-empty string."""
    return value is not None and value != ""


class CrudService(Generic[T]):
    """Filterable CRUD over a single repository.

    ``factory`` builds blank entities for ``create_new``; ``not_found``
    is the exception class raised by ``load`` for unknown ids.
    """

    def __init__(
        self,
        repository: IFilterableRepository[T],
        factory: Callable[[], T],
        not_found: Type[EntityNotFound] = EntityNotFound,
    ) -> None:
        self._repo = repository
        self._factory = factory
        self._not_found = not_found

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_any_matching(
        self, text_filter: Optional[str], page_request: PageRequest
    ) -> Page:
        if has_text(text_filter):
            return self._repo.find_matching(text_filter, page_request)
        return self._repo.find_all(page_request)

    def count_any_matching(self, text_filter: Optional[str]) -> int:
        if has_text(text_filter):
            return self._repo.count_matching(text_filter)
        return self._repo.count()

    def count(self) -> int:
        return self._repo.count()

    def load(self, id: str) -> T:
        entity = self._repo.get_by_id(id)
        if entity is None:
            raise self._not_found(f"Entity {id} not found.")
        return entity

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_new(self, current_user) -> T:
        return self._factory()

    @transaction.atomic
    def save(self, current_user, entity: T) -> T:
        return self._repo.save(entity)

    @transaction.atomic
    def delete(self, current_user, entity: T) -> None:
        self._repo.delete(entity)
        logger.info(
            "crud.deleted",
            entity=type(entity).__name__,
            entity_id=str(getattr(entity, "pk", "")),
            actor_id=str(getattr(current_user, "pk", "")),
        )
