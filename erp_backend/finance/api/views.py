# finance/api/views.py

"""
FINANCE ENDPOINTS (mounted under /api/finance/)

- invoices/                         list / create / retrieve / PATCH
- invoices/<id>/payment/            record a payment (Payment Reconciler)
- accounts/                         chart of accounts; DELETE deactivates
- payments/                         read-only ledger
- dashboard/                        headline numbers
- reports/income-statement/         ?start_date=&end_date=
- reports/cash-flow/                ?start_date=&end_date=
- reports/balance-sheet/            ?as_of_date=
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin, SoftDeleteMixin
from core.api.responses import envelope
from core.exceptions import ValidationFailed
from finance.api.serializers import (
    AccountSerializer,
    AsOfDateSerializer,
    DateRangeSerializer,
    InvoiceCreateSerializer,
    InvoiceDetailSerializer,
    InvoiceSerializer,
    InvoiceUpdateSerializer,
    PaymentSerializer,
    RecordPaymentSerializer,
)
from finance.filters import AccountFilter, InvoiceFilter, PaymentFilter
from finance.models import Account, Invoice, Payment
from finance.services.invoice_service import create_invoice, update_invoice
from finance.services.payment_service import record_payment
from finance.services.reports import balance_sheet, cash_flow, finance_dashboard, income_statement
from permissions.roles import (
    CAP_FINANCE_MANAGE,
    CAP_FINANCE_VIEW,
    HasActionCapability,
    HasCapability,
)

DATE_RANGE_PARAMETERS = [
    OpenApiParameter("start_date", str, required=True, description="YYYY-MM-DD"),
    OpenApiParameter("end_date", str, required=True, description="YYYY-MM-DD"),
]


@extend_schema_view(
    list=extend_schema(tags=["finance"]),
    retrieve=extend_schema(tags=["finance"]),
)
class InvoiceViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = InvoiceFilter
    search_fields = ["invoice_number", "customer__name", "notes"]
    ordering_fields = ["invoice_date", "due_date", "total_amount", "created_at"]

    action_capabilities = {
        "list": CAP_FINANCE_VIEW,
        "retrieve": CAP_FINANCE_VIEW,
        "create": CAP_FINANCE_MANAGE,
        "partial_update": CAP_FINANCE_MANAGE,
        "payment": CAP_FINANCE_MANAGE,
    }

    def get_queryset(self):
        qs = Invoice.objects.select_related("customer", "sales_order").order_by("-invoice_date", "-created_at")
        if self.action == "retrieve":
            qs = qs.prefetch_related("payments")
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return InvoiceDetailSerializer
        return InvoiceSerializer

    @extend_schema(tags=["finance"], request=InvoiceCreateSerializer, responses={201: InvoiceSerializer})
    def create(self, request):
        s = InvoiceCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        invoice = create_invoice(user=request.user, **s.validated_data)
        return envelope(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED, message="Invoice created")

    @extend_schema(tags=["finance"], request=InvoiceUpdateSerializer, responses=InvoiceSerializer)
    def partial_update(self, request, pk=None):
        invoice = self.get_object()
        s = InvoiceUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        invoice = update_invoice(invoice_id=invoice.id, changes=s.validated_data, user=request.user)
        return envelope(InvoiceSerializer(invoice).data, message="Invoice updated")

    @extend_schema(tags=["finance"], request=RecordPaymentSerializer, responses=InvoiceDetailSerializer)
    @action(detail=True, methods=["post"])
    def payment(self, request, pk=None):
        s = RecordPaymentSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = record_payment(
            invoice_id=pk,
            amount=s.validated_data["payment_amount"],
            payment_method=s.validated_data["payment_method"],
            payment_reference=s.validated_data["payment_reference"],
            user=request.user,
        )
        return envelope(
            {
                "invoice": InvoiceSerializer(result.invoice).data,
                "payment": PaymentSerializer(result.payment).data,
            },
            message="Payment recorded successfully",
        )


@extend_schema_view(
    list=extend_schema(tags=["finance"]),
    retrieve=extend_schema(tags=["finance"]),
)
class PaymentViewSet(EnvelopeResponseMixin, viewsets.ReadOnlyModelViewSet):
    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = PaymentFilter
    search_fields = ["payment_number", "payment_reference", "invoice__invoice_number"]
    ordering_fields = ["payment_date", "amount"]

    action_capabilities = {
        "list": CAP_FINANCE_VIEW,
        "retrieve": CAP_FINANCE_VIEW,
    }

    def get_queryset(self):
        return Payment.objects.select_related("invoice", "processed_by").order_by("-payment_date")


@extend_schema_view(
    list=extend_schema(tags=["finance"]),
    retrieve=extend_schema(tags=["finance"]),
    create=extend_schema(tags=["finance"]),
    update=extend_schema(tags=["finance"]),
    partial_update=extend_schema(tags=["finance"]),
    destroy=extend_schema(tags=["finance"]),
)
class AccountViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = AccountSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = AccountFilter
    search_fields = ["account_code", "account_name", "description"]
    ordering_fields = ["account_code", "account_name", "balance"]

    action_capabilities = {
        "list": CAP_FINANCE_VIEW,
        "retrieve": CAP_FINANCE_VIEW,
        "create": CAP_FINANCE_MANAGE,
        "update": CAP_FINANCE_MANAGE,
        "partial_update": CAP_FINANCE_MANAGE,
        "destroy": CAP_FINANCE_MANAGE,
    }

    def get_queryset(self):
        return (
            Account.objects.select_related("parent_account")
            .prefetch_related("sub_accounts")
            .order_by("account_code")
        )


class FinanceDashboardView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_FINANCE_VIEW

    @extend_schema(tags=["finance"], responses={200: dict})
    def get(self, request):
        return envelope(finance_dashboard())


class _DateRangeReportView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_FINANCE_VIEW

    def date_range(self, request):
        if not request.query_params.get("start_date") or not request.query_params.get("end_date"):
            raise ValidationFailed("Start date and end date are required")

        s = DateRangeSerializer(data=request.query_params)
        s.is_valid(raise_exception=True)
        return s.validated_data["start_date"], s.validated_data["end_date"]


class IncomeStatementView(_DateRangeReportView):
    @extend_schema(tags=["finance"], parameters=DATE_RANGE_PARAMETERS, responses={200: dict})
    def get(self, request):
        start_date, end_date = self.date_range(request)
        return envelope(income_statement(start_date=start_date, end_date=end_date))


class CashFlowView(_DateRangeReportView):
    @extend_schema(tags=["finance"], parameters=DATE_RANGE_PARAMETERS, responses={200: dict})
    def get(self, request):
        start_date, end_date = self.date_range(request)
        return envelope(cash_flow(start_date=start_date, end_date=end_date))


class BalanceSheetView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_FINANCE_VIEW

    @extend_schema(
        tags=["finance"],
        parameters=[OpenApiParameter("as_of_date", str, required=False, description="YYYY-MM-DD")],
        responses={200: dict},
    )
    def get(self, request):
        s = AsOfDateSerializer(data=request.query_params)
        s.is_valid(raise_exception=True)
        return envelope(balance_sheet(as_of_date=s.validated_data.get("as_of_date")))
