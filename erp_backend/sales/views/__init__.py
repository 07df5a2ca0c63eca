from .customer import CustomerViewSet
from .sales_order import SalesMetricsView, SalesOrderViewSet

__all__ = ["CustomerViewSet", "SalesOrderViewSet", "SalesMetricsView"]
