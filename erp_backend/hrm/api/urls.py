# hrm/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from hrm.api.views import (
    AttendanceViewSet,
    DepartmentViewSet,
    EmployeeViewSet,
    HRMDashboardView,
    PayrollViewSet,
)

router = DefaultRouter()
router.register(r"departments", DepartmentViewSet, basename="hrm-departments")
router.register(r"employees", EmployeeViewSet, basename="hrm-employees")
router.register(r"attendance", AttendanceViewSet, basename="hrm-attendance")
router.register(r"payroll", PayrollViewSet, basename="hrm-payroll")

urlpatterns = [
    path("dashboard/", HRMDashboardView.as_view(), name="hrm-dashboard"),
    path("", include(router.urls)),
]
