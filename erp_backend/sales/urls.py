# sales/urls.py

"""
SALES URLS

Mounted under /api/sales/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from sales.views import CustomerViewSet, SalesMetricsView, SalesOrderViewSet

router = DefaultRouter()
router.register(r"customers", CustomerViewSet, basename="sales-customers")
router.register(r"orders", SalesOrderViewSet, basename="sales-orders")

urlpatterns = [
    path("metrics/", SalesMetricsView.as_view(), name="sales-metrics"),
    path("", include(router.urls)),
]
