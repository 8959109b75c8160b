"""User administration API views.

Exposes ``UserService`` via HTTP.  ``PolicyDenied`` reasons are returned
verbatim; they are written for the person using the admin screen.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import PolicyDenied
from modules.core.pagination import paginated_response
from modules.users.exceptions import UserNotFound
from modules.users.permissions import IsAdminRole
from modules.users.repositories.django_repository import UserDjangoRepository
from modules.users.serializers import UserSerializer
from modules.users.services import UserService


def _user_not_found() -> Response:
    return Response({"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND)


class UserViewSet(ViewSet):
    permission_classes = [IsAdminRole]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(repository=UserDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/users/?filter=&page=&size="""
        text_filter = request.query_params.get("filter")
        return paginated_response(
            request.query_params,
            lambda page_request: self._service.find_any_matching(
                text_filter, page_request
            ),
            lambda: self._service.count_any_matching(text_filter),
            UserSerializer,
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        try:
            user = self._service.load(pk)
        except UserNotFound:
            return _user_not_found()
        return Response(UserSerializer(user).data)

    def create(self, request: Request) -> Response:
        serializer = UserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if not serializer.validated_data.get("password"):
            return Response(
                {"password": ["This field is required."]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        user = serializer.apply_to(self._service.create_new(request.user))
        try:
            user = self._service.save(request.user, user)
        except PolicyDenied as exc:
            return Response({"detail": exc.reason}, status=status.HTTP_400_BAD_REQUEST)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        try:
            user = self._service.load(pk)
        except UserNotFound:
            return _user_not_found()

        serializer = UserSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            user = self._service.save(request.user, serializer.apply_to(user))
        except PolicyDenied as exc:
            return Response({"detail": exc.reason}, status=status.HTTP_400_BAD_REQUEST)
        return Response(UserSerializer(user).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        try:
            user = self._service.load(pk)
            self._service.delete(request.user, user)
        except UserNotFound:
            return _user_not_found()
        except PolicyDenied as exc:
            return Response({"detail": exc.reason}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)
