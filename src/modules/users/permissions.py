from rest_framework.permissions import BasePermission


class IsAdminRole(BasePermission):
    """Only accounts with the ``admin`` role may manage users and products."""

    message = "Administrator role required."

    def has_permission(self, request, view) -> bool:
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, "is_admin", False))
