# users/admin.py

"""
USERS ADMIN

Email login + ERP job role. The capability list derived from the role is
shown read-only so administrators can see what a role change grants.
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from permissions.roles import effective_capabilities_for

User = get_user_model()


@admin.register(User)
class ERPUserAdmin(DjangoUserAdmin):
    ordering = ("email",)
    list_display = ("email", "display_name", "role", "is_active", "is_staff", "created_at")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "first_name", "last_name")
    readonly_fields = ("capabilities", "last_login", "created_at")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("first_name", "last_name")}),
        ("ERP access", {"fields": ("role", "capabilities")}),
        ("Django admin", {"fields": ("is_active", "is_staff", "is_superuser")}),
        ("Activity", {"fields": ("last_login", "created_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "first_name", "last_name", "role", "password1", "password2"),
            },
        ),
    )

    @admin.display(description="Name")
    def display_name(self, obj):
        return obj.full_name

    @admin.display(description="Capabilities")
    def capabilities(self, obj):
        return ", ".join(sorted(effective_capabilities_for(obj))) or "-"
