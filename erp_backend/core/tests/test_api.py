# core/tests/test_api.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


class EnvelopeTests(TestCase):
    """
    GUARANTEES:
    - failures share the {success: false, error} shape
    - public endpoints answer without a token
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")

    def test_health_check_is_public(self):
        response = self.client.get(reverse("health-check"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"status": "ok", "db": "ok"})

    def test_api_root_lists_modules(self):
        response = self.client.get(reverse("api-root"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("maintenance", response.data["modules"])

    def test_unauthenticated_request_is_enveloped(self):
        response = self.client.get(reverse("inventory-products-list"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])
        self.assertIn("error", response.data)

    def test_missing_record_is_404(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get(
            reverse("production-orders-detail", args=["00000000-0000-0000-0000-000000000000"])
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data["success"])

    def test_serializer_errors_carry_field_details(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("inventory-products-list"), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Validation failed")
        self.assertIn("sku", response.data["errors"])
