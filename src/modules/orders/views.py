"""Order API views.

Exposes ``OrderService`` and ``OrderReportService`` via HTTP using DRF.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django.utils import timezone
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import ViewSet

from modules.core.pagination import paginated_response
from modules.orders.exceptions import OrderNotFound
from modules.orders.fillers import OrderFormFiller
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.reports import OrderReportService
from modules.orders.serializers import (
    CommentSerializer,
    DashboardQuerySerializer,
    OrderFormSerializer,
    OrderListQuerySerializer,
    OrderListSerializer,
    OrderSerializer,
)
from modules.orders.services import OrderService
from modules.products.exceptions import ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository


def _order_not_found() -> Response:
    return Response({"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND)


class OrderViewSet(ViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(order_repository=OrderDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?filter=&after=&page=&size=

        ``filter`` matches the customer name, ``after`` keeps orders due
        strictly after the given date.
        """
        query = OrderListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        text_filter = query.validated_data["filter"]
        after = query.validated_data["after"]

        return paginated_response(
            request.query_params,
            lambda page_request: self._service.find_any_matching_after_due_date(
                text_filter, after, page_request
            ),
            lambda: self._service.count_any_matching_after_due_date(text_filter, after),
            OrderListSerializer,
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.load(pk)
        except OrderNotFound:
            return _order_not_found()
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=["get"])
    def upcoming(self, request: Request) -> Response:
        """GET /api/v1/orders/upcoming/: orders due today or later."""
        summaries = self._service.find_any_matching_starting_today()
        return Response([summary.model_dump(mode="json") for summary in summaries])

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    def _save(self, request: Request, pk: str | None) -> Response:
        form = OrderFormSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        try:
            filler = OrderFormFiller(form.to_dto(), ProductDjangoRepository())
            order = self._service.save_order(request.user, pk, filler)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except OrderNotFound:
            return _order_not_found()
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        # Re-fetch with prefetch for output
        order = self._service.load(order.id)
        return Response(
            OrderSerializer(order).data,
            status=status.HTTP_201_CREATED if pk is None else status.HTTP_200_OK,
        )

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        return self._save(request, None)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/

        Replaces customer, due date/time and items; a ``state`` different
        from the current one is recorded in the history.
        """
        return self._save(request, pk)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def comments(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/comments/"""
        serializer = CommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = self._service.load(pk)
        except OrderNotFound:
            return _order_not_found()

        order = self._service.add_comment(
            request.user, order, serializer.validated_data["comment"]
        )
        order = self._service.load(order.id)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class DashboardView(APIView):
    """GET /api/v1/dashboard/?month=&year=

    Month and year default to the current local date.
    """

    def get(self, request: Request) -> Response:
        query = DashboardQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        today = timezone.localdate()
        month = query.validated_data.get("month", today.month)
        year = query.validated_data.get("year", today.year)

        report_service = OrderReportService(order_repository=OrderDjangoRepository())
        data = report_service.build_dashboard_data(month, year)
        return Response(data.model_dump(mode="json"))
