from .customer import CustomerSerializer
from .sales_order import (
    SalesOrderCreateSerializer,
    SalesOrderItemSerializer,
    SalesOrderSerializer,
    SalesOrderStatusSerializer,
    SalesOrderUpdateSerializer,
)

__all__ = [
    "CustomerSerializer",
    "SalesOrderCreateSerializer",
    "SalesOrderItemSerializer",
    "SalesOrderSerializer",
    "SalesOrderStatusSerializer",
    "SalesOrderUpdateSerializer",
]
