# inventory/urls.py

"""
INVENTORY URLS

Mounted under /api/inventory/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from inventory.views import (
    InventoryDashboardView,
    InventoryItemViewSet,
    InventoryTransactionViewSet,
    ProductViewSet,
)

router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="inventory-products")
router.register(r"items", InventoryItemViewSet, basename="inventory-items")
router.register(r"transactions", InventoryTransactionViewSet, basename="inventory-transactions")

urlpatterns = [
    path("dashboard/", InventoryDashboardView.as_view(), name="inventory-dashboard"),
    path("", include(router.urls)),
]
