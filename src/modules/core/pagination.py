"""Page requests for repository look-ups.

Repositories receive a ``PageRequest`` and answer with a Django ``Page``
so the Service Layer never deals with offsets.  ``paginated_response``
wraps a page in the ``{"count", "page", "results"}`` envelope every list
endpoint returns.
"""

from __future__ import annotations

from typing import Callable

from django.conf import settings
from django.core.paginator import InvalidPage, Page, Paginator
from django.db import models
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response


class PageRequest(BaseModel):
    """Immutable 1-based page selector."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)

    @classmethod
    def from_query_params(cls, params) -> PageRequest:
        """Build from ``?page=&size=`` query params, capping the size.

        Raises ``pydantic.ValidationError`` for non-numeric or out-of-range
        values.
        """
        data = {key: params[key] for key in ("page", "size") if params.get(key)}
        request = cls(**data)
        if request.size > settings.MAX_PAGE_SIZE:
            return request.model_copy(update={"size": settings.MAX_PAGE_SIZE})
        return request


def paginate(queryset: models.QuerySet, page_request: PageRequest) -> Page:
    """Slice *queryset* according to *page_request*.

    Raises ``django.core.paginator.InvalidPage`` when the page is past the end.
    """
    paginator = Paginator(queryset, page_request.size)
    return paginator.page(page_request.page)


def paginated_response(
    query_params,
    fetch: Callable[[PageRequest], Page],
    count: Callable[[], int],
    serializer_class,
) -> Response:
    """Run *fetch* for the requested page and serialize it with the total.

    Malformed ``page``/``size`` answer 400; a page past the end answers 404.
    """
    try:
        page = fetch(PageRequest.from_query_params(query_params))
    except PydanticValidationError as exc:
        return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
    except InvalidPage:
        return Response({"detail": "Invalid page."}, status=status.HTTP_404_NOT_FOUND)
    return Response(
        {
            "count": count(),
            "page": page.number,
            "results": serializer_class(page.object_list, many=True).data,
        }
    )
