from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from modules.users.models import User


@admin.register(User)
class BakeryUserAdmin(UserAdmin):
    list_display = ("username", "email", "first_name", "last_name", "role", "locked")
    list_filter = ("role", "locked", "is_staff")
    fieldsets = UserAdmin.fieldsets + (("Bakery", {"fields": ("role", "locked")}),)
