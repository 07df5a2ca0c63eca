from .product import Product
from .inventory_item import InventoryItem
from .inventory_transaction import InventoryTransaction

__all__ = ["Product", "InventoryItem", "InventoryTransaction"]
