# users/tests/test_auth.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


class RegistrationTests(TestCase):
    """
    GUARANTEES:
    - self-registration always yields role=user
    - duplicate emails are rejected
    - JWT login works with email + password
    """

    def setUp(self):
        self.client = APIClient()

    def test_register_ignores_requested_role(self):
        response = self.client.post(
            reverse("register"),
            {"email": "new@example.com", "password": "S3cure-pass-99", "role": "admin"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["role"], "user")
        self.assertEqual(User.objects.get(email="new@example.com").role, "user")

    def test_duplicate_email_rejected(self):
        User.objects.create_user(email="taken@example.com", password="pass")

        response = self.client.post(
            reverse("register"),
            {"email": "TAKEN@example.com", "password": "S3cure-pass-99"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data["errors"])

    def test_jwt_login_and_me(self):
        User.objects.create_user(email="op@example.com", password="S3cure-pass-99", role="operator")

        login = self.client.post(
            reverse("jwt-create"),
            {"email": "op@example.com", "password": "S3cure-pass-99"},
            format="json",
        )
        self.assertEqual(login.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        me = self.client.get(reverse("me"))

        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["data"]["email"], "op@example.com")
        self.assertIn("production.operate", me.data["data"]["capabilities"])

    def test_wrong_password_is_401(self):
        User.objects.create_user(email="op@example.com", password="S3cure-pass-99")

        response = self.client.post(
            reverse("jwt-create"),
            {"email": "op@example.com", "password": "nope"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])


class UserAdminTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.manager = User.objects.create_user(email="boss@example.com", password="pass", role="manager")
        self.member = User.objects.create_user(email="member@example.com", password="pass")

    def test_admin_promotes_user(self):
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("users-detail", args=[self.member.id]),
            {"role": "quality_inspector"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.member.refresh_from_db()
        self.assertEqual(self.member.role, "quality_inspector")

    def test_manager_cannot_manage_users(self):
        self.client.force_authenticate(self.manager)

        response = self.client.get(reverse("users-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_users_are_not_deleted(self):
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("users-detail", args=[self.member.id]))

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertTrue(User.objects.filter(id=self.member.id).exists())
