"""Generic repository interfaces (Dependency Inversion Principle).

``IRepository[T]`` is the base contract every domain repository extends.
``IFilterableRepository[T]`` adds the free-text search and paging used by
the generic CRUD service.  Service-layer code depends on these
abstractions, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Order``, ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key, ``None`` if absent."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def count(self) -> int:
        """Count every live entity."""


class IFilterableRepository(IRepository[T]):
    """Repository that supports free-text search with paging."""

    @abstractmethod
    def find_all(self, page_request: PageRequest) -> Page:
        """Return one page of all live entities."""

    @abstractmethod
    def find_matching(self, text: str, page_request: PageRequest) -> Page:
        """Return one page of entities whose searchable fields contain *text*."""

    @abstractmethod
    def count_matching(self, text: str) -> int:
        """Count entities whose searchable fields contain *text*."""

    @abstractmethod
    def delete(self, entity: T) -> None:
        """Remove an entity (soft or hard delete)."""
