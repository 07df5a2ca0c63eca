from .customer import Customer
from .sales_order import SalesOrder, SalesOrderItem

__all__ = ["Customer", "SalesOrder", "SalesOrderItem"]
