# users/management/commands/seed_users.py

from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from permissions.roles import (
    ROLE_ACCOUNTANT,
    ROLE_ADMIN,
    ROLE_HR_MANAGER,
    ROLE_MAINTENANCE_TECHNICIAN,
    ROLE_MANAGER,
    ROLE_OPERATOR,
    ROLE_PRODUCTION_MANAGER,
    ROLE_QUALITY_INSPECTOR,
    ROLE_SALES_MANAGER,
    ROLE_SALES_REP,
    ROLE_WAREHOUSE_MANAGER,
)


@dataclass(frozen=True)
class SeedUser:
    role: str
    email: str
    first_name: str = ""
    last_name: str = ""


SEED_USERS = [
    SeedUser(ROLE_ADMIN, "admin@example.com", "System", "Admin"),
    SeedUser(ROLE_MANAGER, "manager@example.com", "Plant", "Manager"),
    SeedUser(ROLE_PRODUCTION_MANAGER, "production@example.com", "Production", "Lead"),
    SeedUser(ROLE_SALES_MANAGER, "sales@example.com", "Sales", "Lead"),
    SeedUser(ROLE_WAREHOUSE_MANAGER, "warehouse@example.com", "Warehouse", "Lead"),
    SeedUser(ROLE_ACCOUNTANT, "finance@example.com", "Finance", "Officer"),
    SeedUser(ROLE_HR_MANAGER, "hr@example.com", "HR", "Lead"),
    SeedUser(ROLE_QUALITY_INSPECTOR, "quality@example.com", "Quality", "Inspector"),
    SeedUser(ROLE_MAINTENANCE_TECHNICIAN, "maintenance@example.com", "Maintenance", "Tech"),
    SeedUser(ROLE_OPERATOR, "operator@example.com", "Line", "Operator"),
    SeedUser(ROLE_SALES_REP, "rep@example.com", "Sales", "Rep"),
]


class Command(BaseCommand):
    help = "Seed one staff user per ERP role (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            type=str,
            default="Pass1234!",
            help="Password for seeded users (default: Pass1234!)",
        )
        parser.add_argument(
            "--force-password",
            action="store_true",
            help="Reset password for existing seeded users too.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options.get("password") or ""
        force_password = bool(options.get("force_password"))

        if len(password) < 6:
            raise CommandError("--password must be at least 6 characters.")

        User = get_user_model()

        created_count = 0
        updated_count = 0

        for seed in SEED_USERS:
            is_admin = seed.role == ROLE_ADMIN

            user = User.objects.filter(email=seed.email).first()
            if user is None:
                User.objects.create_user(
                    email=seed.email,
                    password=password,
                    first_name=seed.first_name,
                    last_name=seed.last_name,
                    role=seed.role,
                    is_staff=True,
                    is_superuser=is_admin,
                )
                created_count += 1
                continue

            user.role = seed.role
            user.is_staff = True
            user.is_superuser = is_admin
            user.is_active = True
            if force_password:
                user.set_password(password)
            user.save()
            updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed complete: created={created_count}, updated={updated_count}"
            )
        )
