"""Cross-module domain exceptions.

Raised by the Service Layer; the API layer (Views) translates them into
HTTP responses.  Store failures (``django.db.DatabaseError`` and friends)
are deliberately not wrapped here and reach the caller unchanged.
"""

from __future__ import annotations


class EntityNotFound(Exception):
    """The requested entity does not exist or has been soft-deleted."""


class PolicyDenied(Exception):
    """A business rule refused the operation.

    ``reason`` is written for end users and can be shown as-is.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
