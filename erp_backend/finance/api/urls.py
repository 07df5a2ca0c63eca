# finance/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from finance.api.views import (
    AccountViewSet,
    BalanceSheetView,
    CashFlowView,
    FinanceDashboardView,
    IncomeStatementView,
    InvoiceViewSet,
    PaymentViewSet,
)

router = DefaultRouter()
router.register(r"accounts", AccountViewSet, basename="finance-accounts")
router.register(r"invoices", InvoiceViewSet, basename="finance-invoices")
router.register(r"payments", PaymentViewSet, basename="finance-payments")

urlpatterns = [
    path("dashboard/", FinanceDashboardView.as_view(), name="finance-dashboard"),
    path("reports/income-statement/", IncomeStatementView.as_view(), name="finance-income-statement"),
    path("reports/balance-sheet/", BalanceSheetView.as_view(), name="finance-balance-sheet"),
    path("reports/cash-flow/", CashFlowView.as_view(), name="finance-cash-flow"),
    path("", include(router.urls)),
]
