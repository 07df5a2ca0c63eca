# quality/api/views.py

"""
QUALITY ENDPOINTS (mounted under /api/quality/)

- controls/                     inspections; closed via controls/<id>/result/
- standards/                    acceptance limits; DELETE deactivates
- tests/                        measurements recorded against a standard
- reports/                      list / create / PATCH until approved
- reports/<id>/complete|approve/
- dashboard/
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin, SoftDeleteMixin
from core.api.responses import envelope
from permissions.roles import CAP_QUALITY_MANAGE, CAP_QUALITY_VIEW, HasActionCapability, HasCapability
from quality.api.serializers import (
    InspectionResultSerializer,
    QualityControlCreateSerializer,
    QualityControlSerializer,
    QualityReportCreateSerializer,
    QualityReportSerializer,
    QualityReportUpdateSerializer,
    QualityStandardSerializer,
    QualityTestCreateSerializer,
    QualityTestSerializer,
)
from quality.filters import QualityControlFilter, QualityReportFilter, QualityStandardFilter, QualityTestFilter
from quality.models import QualityControl, QualityReport, QualityStandard, QualityTest
from quality.services.inspection_service import create_inspection, record_inspection_result
from quality.services.report_service import (
    approve_quality_report,
    complete_quality_report,
    create_quality_report,
    update_quality_report,
)
from quality.services.reports import quality_dashboard
from quality.services.test_service import record_quality_test


@extend_schema_view(
    list=extend_schema(tags=["quality"]),
    retrieve=extend_schema(tags=["quality"]),
)
class QualityControlViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Inspections are closed by recording a result, never deleted."""

    serializer_class = QualityControlSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = QualityControlFilter
    search_fields = ["inspection_number", "batch_number", "product__name"]
    ordering_fields = ["created_at", "inspected_at"]

    action_capabilities = {
        "list": CAP_QUALITY_VIEW,
        "retrieve": CAP_QUALITY_VIEW,
        "create": CAP_QUALITY_MANAGE,
        "result": CAP_QUALITY_MANAGE,
    }

    def get_queryset(self):
        return QualityControl.objects.select_related("product", "production_order", "inspector").order_by(
            "-created_at"
        )

    @extend_schema(tags=["quality"], request=QualityControlCreateSerializer, responses={201: QualityControlSerializer})
    def create(self, request):
        s = QualityControlCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        inspection = create_inspection(user=request.user, **s.validated_data)
        return envelope(
            QualityControlSerializer(inspection).data,
            status=status.HTTP_201_CREATED,
            message="Quality inspection created",
        )

    @extend_schema(tags=["quality"], request=InspectionResultSerializer, responses=QualityControlSerializer)
    @action(detail=True, methods=["post", "patch"])
    def result(self, request, pk=None):
        inspection = self.get_object()
        s = InspectionResultSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        inspection = record_inspection_result(inspection_id=inspection.id, user=request.user, **s.validated_data)
        return envelope(QualityControlSerializer(inspection).data, message="Inspection result recorded")


@extend_schema_view(
    list=extend_schema(tags=["quality"]),
    retrieve=extend_schema(tags=["quality"]),
    create=extend_schema(tags=["quality"]),
    update=extend_schema(tags=["quality"]),
    partial_update=extend_schema(tags=["quality"]),
    destroy=extend_schema(tags=["quality"]),
)
class QualityStandardViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = QualityStandardSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = QualityStandardFilter
    search_fields = ["name", "parameter_name", "product__name"]
    ordering_fields = ["name", "parameter_name", "created_at"]

    action_capabilities = {
        "list": CAP_QUALITY_VIEW,
        "retrieve": CAP_QUALITY_VIEW,
        "create": CAP_QUALITY_MANAGE,
        "update": CAP_QUALITY_MANAGE,
        "partial_update": CAP_QUALITY_MANAGE,
        "destroy": CAP_QUALITY_MANAGE,
    }

    def get_queryset(self):
        return QualityStandard.objects.select_related("product").order_by("name", "parameter_name")


@extend_schema_view(
    list=extend_schema(tags=["quality"]),
    retrieve=extend_schema(tags=["quality"]),
)
class QualityTestViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = QualityTestSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = QualityTestFilter
    search_fields = ["test_name", "quality_control__inspection_number", "standard__parameter_name"]
    ordering_fields = ["test_date", "created_at"]

    action_capabilities = {
        "list": CAP_QUALITY_VIEW,
        "retrieve": CAP_QUALITY_VIEW,
        "create": CAP_QUALITY_MANAGE,
    }

    def get_queryset(self):
        return QualityTest.objects.select_related("quality_control", "standard", "tested_by").order_by("-test_date")

    @extend_schema(tags=["quality"], request=QualityTestCreateSerializer, responses={201: QualityTestSerializer})
    def create(self, request):
        s = QualityTestCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        test = record_quality_test(user=request.user, **s.validated_data)
        return envelope(
            QualityTestSerializer(self.get_queryset().get(id=test.id)).data,
            status=status.HTTP_201_CREATED,
            message="Quality test recorded",
        )


@extend_schema_view(
    list=extend_schema(tags=["quality"]),
    retrieve=extend_schema(tags=["quality"]),
)
class QualityReportViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = QualityReportSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = QualityReportFilter
    search_fields = ["report_number", "quality_control__inspection_number", "summary"]
    ordering_fields = ["report_date", "created_at"]

    action_capabilities = {
        "list": CAP_QUALITY_VIEW,
        "retrieve": CAP_QUALITY_VIEW,
        "create": CAP_QUALITY_MANAGE,
        "partial_update": CAP_QUALITY_MANAGE,
        "complete": CAP_QUALITY_MANAGE,
        "approve": CAP_QUALITY_MANAGE,
    }

    def get_queryset(self):
        return QualityReport.objects.select_related(
            "quality_control", "quality_control__product", "generated_by", "approved_by"
        ).order_by("-report_date", "-created_at")

    def _fresh(self, report_id):
        return self.get_queryset().get(id=report_id)

    @extend_schema(tags=["quality"], request=QualityReportCreateSerializer, responses={201: QualityReportSerializer})
    def create(self, request):
        s = QualityReportCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        report = create_quality_report(user=request.user, **s.validated_data)
        return envelope(
            QualityReportSerializer(self._fresh(report.id)).data,
            status=status.HTTP_201_CREATED,
            message="Quality report created",
        )

    @extend_schema(tags=["quality"], request=QualityReportUpdateSerializer, responses=QualityReportSerializer)
    def partial_update(self, request, pk=None):
        report = self.get_object()
        s = QualityReportUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        update_quality_report(report_id=report.id, changes=s.validated_data, user=request.user)
        return envelope(QualityReportSerializer(self._fresh(report.id)).data, message="Quality report updated")

    @extend_schema(tags=["quality"], request=None, responses=QualityReportSerializer)
    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        complete_quality_report(report_id=pk, user=request.user)
        return envelope(QualityReportSerializer(self._fresh(pk)).data, message="Quality report completed")

    @extend_schema(tags=["quality"], request=None, responses=QualityReportSerializer)
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        approve_quality_report(report_id=pk, user=request.user)
        return envelope(QualityReportSerializer(self._fresh(pk)).data, message="Quality report approved")


class QualityDashboardView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_QUALITY_VIEW

    @extend_schema(tags=["quality"], responses={200: dict})
    def get(self, request):
        return envelope(quality_dashboard())
