# maintenance/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from maintenance.api.views import (
    EquipmentViewSet,
    MaintenanceDashboardView,
    MaintenanceHistoryViewSet,
    MaintenanceOrderViewSet,
    MaintenanceScheduleViewSet,
)

router = DefaultRouter()
router.register(r"equipment", EquipmentViewSet, basename="maintenance-equipment")
router.register(r"orders", MaintenanceOrderViewSet, basename="maintenance-orders")
router.register(r"schedules", MaintenanceScheduleViewSet, basename="maintenance-schedules")
router.register(r"history", MaintenanceHistoryViewSet, basename="maintenance-history")

urlpatterns = [
    path("dashboard/", MaintenanceDashboardView.as_view(), name="maintenance-dashboard"),
    path("", include(router.urls)),
]
