# procurement/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from procurement.api.views import (
    ProcurementDashboardView,
    PurchaseOrderViewSet,
    PurchaseRequestViewSet,
    SupplierViewSet,
    SupplyChainAnalyticsView,
)

router = DefaultRouter()
router.register(r"suppliers", SupplierViewSet, basename="procurement-suppliers")
router.register(r"requests", PurchaseRequestViewSet, basename="procurement-requests")
router.register(r"orders", PurchaseOrderViewSet, basename="procurement-orders")

urlpatterns = [
    path("dashboard/", ProcurementDashboardView.as_view(), name="procurement-dashboard"),
    path("analytics/", SupplyChainAnalyticsView.as_view(), name="procurement-analytics"),
    path("", include(router.urls)),
]
