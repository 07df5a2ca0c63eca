# sales/views/customer.py

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin, SoftDeleteMixin
from permissions.roles import CAP_SALES_MANAGE, CAP_SALES_VIEW, HasActionCapability
from sales.filters import CustomerFilter
from sales.models import Customer
from sales.serializers import CustomerSerializer


@extend_schema_view(
    list=extend_schema(tags=["sales"]),
    retrieve=extend_schema(tags=["sales"]),
    create=extend_schema(tags=["sales"]),
    update=extend_schema(tags=["sales"]),
    partial_update=extend_schema(tags=["sales"]),
    destroy=extend_schema(tags=["sales"]),
)
class CustomerViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = CustomerSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = CustomerFilter
    search_fields = ["customer_code", "name", "email", "contact_person"]
    ordering_fields = ["name", "customer_code", "created_at"]

    action_capabilities = {
        "list": CAP_SALES_VIEW,
        "retrieve": CAP_SALES_VIEW,
        "create": CAP_SALES_MANAGE,
        "update": CAP_SALES_MANAGE,
        "partial_update": CAP_SALES_MANAGE,
        "destroy": CAP_SALES_MANAGE,
    }

    def get_queryset(self):
        return Customer.objects.all().order_by("name")
