# inventory/views/product.py

"""
PRODUCT VIEWSET

- CRUD on the item master
- DELETE deactivates (is_active=False); products referenced by orders stay intact
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin, SoftDeleteMixin
from inventory.filters import ProductFilter
from inventory.models import Product
from inventory.serializers import ProductSerializer
from permissions.roles import (
    CAP_INVENTORY_MANAGE,
    CAP_INVENTORY_VIEW,
    HasActionCapability,
)


@extend_schema_view(
    list=extend_schema(tags=["inventory"]),
    retrieve=extend_schema(tags=["inventory"]),
    create=extend_schema(tags=["inventory"]),
    update=extend_schema(tags=["inventory"]),
    partial_update=extend_schema(tags=["inventory"]),
    destroy=extend_schema(tags=["inventory"]),
)
class ProductViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = ProductFilter
    search_fields = ["sku", "name", "description"]
    ordering_fields = ["name", "sku", "created_at", "selling_price"]

    action_capabilities = {
        "list": CAP_INVENTORY_VIEW,
        "retrieve": CAP_INVENTORY_VIEW,
        "create": CAP_INVENTORY_MANAGE,
        "update": CAP_INVENTORY_MANAGE,
        "partial_update": CAP_INVENTORY_MANAGE,
        "destroy": CAP_INVENTORY_MANAGE,
    }

    def get_queryset(self):
        return Product.objects.select_related("inventory_item").order_by("name")
