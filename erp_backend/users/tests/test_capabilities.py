# users/tests/test_capabilities.py

from django.contrib.auth import get_user_model
from django.test import TestCase

from permissions.roles import (
    ALL_CAPABILITIES,
    CAP_FINANCE_MANAGE,
    CAP_HRM_ATTENDANCE,
    CAP_HRM_MANAGE,
    CAP_USERS_MANAGE,
    ROLE_CAPABILITIES,
    effective_capabilities_for,
    user_has_capability,
)

User = get_user_model()


class CapabilityMapTests(TestCase):
    def test_every_role_can_record_attendance(self):
        for role, caps in ROLE_CAPABILITIES.items():
            self.assertIn(CAP_HRM_ATTENDANCE, caps, role)

    def test_only_admin_manages_users(self):
        holders = {role for role, caps in ROLE_CAPABILITIES.items() if CAP_USERS_MANAGE in caps}
        self.assertEqual(holders, {"admin"})

    def test_superuser_has_everything(self):
        root = User.objects.create_superuser(email="root@example.com", password="pass")

        self.assertEqual(effective_capabilities_for(root), set(ALL_CAPABILITIES))

    def test_role_scoping(self):
        accountant = User.objects.create_user(email="acc@example.com", password="pass", role="accountant")

        self.assertTrue(user_has_capability(accountant, CAP_FINANCE_MANAGE))
        self.assertFalse(user_has_capability(accountant, CAP_HRM_MANAGE))

    def test_unknown_role_grants_nothing(self):
        user = User(email="ghost@example.com", role="nonexistent")

        self.assertEqual(effective_capabilities_for(user), set())
