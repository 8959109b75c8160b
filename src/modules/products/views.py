"""Product API views.

Everybody signed in can browse the catalogue (the order form needs it);
only administrators can change it.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import PolicyDenied
from modules.core.pagination import paginated_response
from modules.products.exceptions import ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService
from modules.users.permissions import IsAdminRole


def _product_not_found() -> Response:
    return Response({"detail": "Product not found."}, status=status.HTTP_404_NOT_FOUND)


class ProductViewSet(ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [IsAuthenticated()]
        return [IsAdminRole()]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?filter=&page=&size="""
        text_filter = request.query_params.get("filter")
        return paginated_response(
            request.query_params,
            lambda page_request: self._service.find_any_matching(
                text_filter, page_request
            ),
            lambda: self._service.count_any_matching(text_filter),
            ProductSerializer,
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        try:
            product = self._service.load(pk)
        except ProductNotFound:
            return _product_not_found()
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        serializer = ProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.apply_to(self._service.create_new(request.user))
        try:
            product = self._service.save(request.user, product)
        except PolicyDenied as exc:
            return Response({"detail": exc.reason}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        try:
            product = self._service.load(pk)
        except ProductNotFound:
            return _product_not_found()

        serializer = ProductSerializer(product, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            product = self._service.save(request.user, serializer.apply_to(product))
        except PolicyDenied as exc:
            return Response({"detail": exc.reason}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        try:
            product = self._service.load(pk)
        except ProductNotFound:
            return _product_not_found()
        self._service.delete(request.user, product)
        return Response(status=status.HTTP_204_NO_CONTENT)
