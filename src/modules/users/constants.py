"""User domain constants."""

from django.db import models


class Role(models.TextChoices):
    BARISTA = "barista", "Barista"
    BAKER = "baker", "Baker"
    ADMIN = "admin", "Admin"


MODIFY_LOCKED_USER_NOT_PERMITTED = (
    "User has been locked and cannot be modified or deleted"
)
DELETING_SELF_NOT_PERMITTED = "You cannot delete your own account"
