from .product import ProductSerializer
from .stock import (
    InventoryItemSerializer,
    InventoryTransactionSerializer,
    StockAdjustmentSerializer,
    StockIssueSerializer,
)

__all__ = [
    "ProductSerializer",
    "InventoryItemSerializer",
    "InventoryTransactionSerializer",
    "StockAdjustmentSerializer",
    "StockIssueSerializer",
]
