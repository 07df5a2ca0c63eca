from .product import ProductViewSet
from .stock import InventoryDashboardView, InventoryItemViewSet, InventoryTransactionViewSet

__all__ = [
    "ProductViewSet",
    "InventoryItemViewSet",
    "InventoryTransactionViewSet",
    "InventoryDashboardView",
]
