# sales/serializers/customer.py

from django.db import transaction
from rest_framework import serializers

from core.services.sequences import next_code
from sales.models import Customer

CUSTOMER_CODE_PREFIX = "CUST"


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "customer_code",
            "name",
            "contact_person",
            "email",
            "phone",
            "billing_address",
            "shipping_address",
            "credit_limit",
            "payment_terms",
            "customer_type",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "customer_code", "is_active", "created_at", "updated_at")

    def validate_credit_limit(self, value):
        if value < 0:
            raise serializers.ValidationError("credit_limit cannot be negative")
        return value

    @transaction.atomic
    def create(self, validated_data):
        validated_data["customer_code"] = next_code(CUSTOMER_CODE_PREFIX)
        return super().create(validated_data)
