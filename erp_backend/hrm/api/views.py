# hrm/api/views.py

"""
HRM ENDPOINTS (mounted under /api/hrm/)

- departments/                  master data (soft delete)
- employees/                    master data; DELETE terminates
- attendance/                   list / manual record
- attendance/checkin/           clock in  (self, or any employee with hrm.manage)
- attendance/checkout/          clock out
- payroll/                      list / retrieve
- payroll/generate/             compute a monthly payroll
- payroll/<id>/approve/         draft -> approved
- dashboard/
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin, SoftDeleteMixin
from core.api.responses import envelope
from core.exceptions import ValidationFailed
from hrm.api.serializers import (
    AttendanceSerializer,
    ClockSerializer,
    DepartmentSerializer,
    EmployeeSerializer,
    GeneratePayrollSerializer,
    PayrollSerializer,
    RecordAttendanceSerializer,
)
from hrm.filters import AttendanceFilter, EmployeeFilter, PayrollFilter
from hrm.models import Attendance, Department, Employee, Payroll
from hrm.services.attendance_service import check_in, check_out, record_attendance
from hrm.services.employee_service import terminate_employee
from hrm.services.payroll_service import approve_payroll, generate_payroll
from hrm.services.reports import hrm_dashboard
from permissions.roles import (
    CAP_HRM_ATTENDANCE,
    CAP_HRM_MANAGE,
    CAP_HRM_VIEW,
    HasActionCapability,
    HasCapability,
    user_has_capability,
)

MASTER_DATA_CAPABILITIES = {
    "list": CAP_HRM_VIEW,
    "retrieve": CAP_HRM_VIEW,
    "create": CAP_HRM_MANAGE,
    "update": CAP_HRM_MANAGE,
    "partial_update": CAP_HRM_MANAGE,
    "destroy": CAP_HRM_MANAGE,
}


@extend_schema_view(
    list=extend_schema(tags=["hrm"]),
    retrieve=extend_schema(tags=["hrm"]),
    create=extend_schema(tags=["hrm"]),
    update=extend_schema(tags=["hrm"]),
    partial_update=extend_schema(tags=["hrm"]),
    destroy=extend_schema(tags=["hrm"]),
)
class DepartmentViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = DepartmentSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_fields = ["is_active"]
    search_fields = ["name", "code"]
    action_capabilities = MASTER_DATA_CAPABILITIES

    def get_queryset(self):
        return Department.objects.all().order_by("name")


@extend_schema_view(
    list=extend_schema(tags=["hrm"]),
    retrieve=extend_schema(tags=["hrm"]),
    create=extend_schema(tags=["hrm"]),
    update=extend_schema(tags=["hrm"]),
    partial_update=extend_schema(tags=["hrm"]),
    destroy=extend_schema(tags=["hrm"]),
)
class EmployeeViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = EmployeeSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = EmployeeFilter
    search_fields = ["employee_code", "first_name", "last_name", "email", "job_title"]
    ordering_fields = ["last_name", "hire_date", "employee_code"]
    action_capabilities = MASTER_DATA_CAPABILITIES

    soft_delete_field = "status"
    soft_delete_value = Employee.STATUS_TERMINATED

    def get_queryset(self):
        return Employee.objects.select_related("department").order_by("last_name", "first_name")

    def perform_soft_delete(self, instance):
        terminate_employee(employee_id=instance.id, user=self.request.user)
        instance.refresh_from_db()


@extend_schema_view(
    list=extend_schema(tags=["hrm"]),
    retrieve=extend_schema(tags=["hrm"]),
)
class AttendanceViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AttendanceSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = AttendanceFilter
    ordering_fields = ["date", "hours_worked"]

    action_capabilities = {
        "list": CAP_HRM_VIEW,
        "retrieve": CAP_HRM_VIEW,
        "create": CAP_HRM_MANAGE,
        "checkin": CAP_HRM_ATTENDANCE,
        "checkout": CAP_HRM_ATTENDANCE,
    }

    def get_queryset(self):
        return Attendance.objects.select_related("employee").order_by("-date")

    def _clock_target(self, request):
        s = ClockSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        own = Employee.objects.filter(user=request.user).values_list("id", flat=True).first()
        employee_id = s.validated_data.get("employee_id") or own
        if employee_id is None:
            raise ValidationFailed("employee_id is required", errors={"employee_id": ["required"]})

        if employee_id != own and not user_has_capability(request.user, CAP_HRM_MANAGE):
            raise PermissionDenied("You can only clock in or out for yourself.")
        return employee_id

    @extend_schema(tags=["hrm"], request=RecordAttendanceSerializer, responses={201: AttendanceSerializer})
    def create(self, request):
        s = RecordAttendanceSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        row = record_attendance(user=request.user, **s.validated_data)
        return envelope(AttendanceSerializer(row).data, status=status.HTTP_201_CREATED, message="Attendance recorded")

    @extend_schema(tags=["hrm"], request=ClockSerializer, responses=AttendanceSerializer)
    @action(detail=False, methods=["post"])
    def checkin(self, request):
        row = check_in(employee_id=self._clock_target(request), user=request.user)
        return envelope(AttendanceSerializer(row).data, message="Checked in successfully")

    @extend_schema(tags=["hrm"], request=ClockSerializer, responses=AttendanceSerializer)
    @action(detail=False, methods=["post"])
    def checkout(self, request):
        row = check_out(employee_id=self._clock_target(request), user=request.user)
        return envelope(AttendanceSerializer(row).data, message="Checked out successfully")


@extend_schema_view(
    list=extend_schema(tags=["hrm"]),
    retrieve=extend_schema(tags=["hrm"]),
)
class PayrollViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = PayrollSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = PayrollFilter
    ordering_fields = ["pay_year", "pay_month", "net_salary"]

    action_capabilities = {
        "list": CAP_HRM_VIEW,
        "retrieve": CAP_HRM_VIEW,
        "generate": CAP_HRM_MANAGE,
        "approve": CAP_HRM_MANAGE,
    }

    def get_queryset(self):
        return Payroll.objects.select_related("employee").order_by("-pay_year", "-pay_month")

    @extend_schema(tags=["hrm"], request=GeneratePayrollSerializer, responses={201: PayrollSerializer})
    @action(detail=False, methods=["post"])
    def generate(self, request):
        s = GeneratePayrollSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        payroll = generate_payroll(user=request.user, **s.validated_data)
        return envelope(
            PayrollSerializer(payroll).data,
            status=status.HTTP_201_CREATED,
            message="Payroll generated successfully",
        )

    @extend_schema(tags=["hrm"], request=None, responses=PayrollSerializer)
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        payroll = approve_payroll(payroll_id=pk, user=request.user)
        return envelope(PayrollSerializer(payroll).data, message="Payroll approved")


class HRMDashboardView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_HRM_VIEW

    @extend_schema(tags=["hrm"], responses={200: dict})
    def get(self, request):
        return envelope(hrm_dashboard())
