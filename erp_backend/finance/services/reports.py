# finance/services/reports.py

"""
FINANCE REPORTS (read-only)

Revenue  = Σ total_amount of invoices that became paid in the period (by payment_date)
Expenses = Σ total_amount of completed purchase orders (by order_date)
Cash in  = Σ completed payments (by payment_date)
Balance sheet = Σ balance of active accounts per type (asset / liability / equity)
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.db.models import F, Sum, Value
from django.db.models.functions import Coalesce, TruncMonth
from django.utils import timezone

from core.services.money import money
from finance.models import Account, Invoice, Payment
from procurement.models import PurchaseOrder

OPEN_INVOICE_STATUSES = (Invoice.STATUS_PENDING, Invoice.STATUS_PARTIALLY_PAID)

_ZERO = Value(Decimal("0.00"))


def _paid_revenue(start: date, end: date) -> Decimal:
    return money(
        Invoice.objects.filter(
            status=Invoice.STATUS_PAID,
            payment_date__gte=start,
            payment_date__lte=end,
        ).aggregate(total=Coalesce(Sum("total_amount"), _ZERO))["total"]
    )


def _purchase_expenses(start: date, end: date) -> Decimal:
    return money(
        PurchaseOrder.objects.filter(
            status=PurchaseOrder.STATUS_COMPLETED,
            order_date__gte=start,
            order_date__lte=end,
        ).aggregate(total=Coalesce(Sum("total_amount"), _ZERO))["total"]
    )


def _completed_payments(start: date, end: date):
    return Payment.objects.filter(
        status=Payment.STATUS_COMPLETED,
        payment_date__date__gte=start,
        payment_date__date__lte=end,
    )


def _payment_row(payment: Payment) -> dict:
    return {
        "id": str(payment.id),
        "payment_number": payment.payment_number,
        "invoice_number": payment.invoice.invoice_number,
        "customer": payment.invoice.customer.name,
        "amount": str(money(payment.amount)),
        "payment_method": payment.payment_method,
        "payment_date": payment.payment_date.isoformat(),
    }


def finance_dashboard() -> dict:
    today = timezone.localdate()
    month_start = today.replace(day=1)
    six_months_ago = today - timedelta(days=183)

    open_invoices = Invoice.objects.filter(status__in=OPEN_INVOICE_STATUSES)
    outstanding = open_invoices.aggregate(
        total=Coalesce(Sum(F("total_amount") - F("paid_amount")), _ZERO)
    )["total"]

    overdue = (
        open_invoices.select_related("customer")
        .filter(due_date__lt=today)
        .order_by("due_date")[:10]
    )

    recent_payments = (
        Payment.objects.select_related("invoice", "invoice__customer")
        .order_by("-payment_date")[:10]
    )

    trends = (
        Invoice.objects.filter(status=Invoice.STATUS_PAID, payment_date__gte=six_months_ago)
        .annotate(month=TruncMonth("payment_date"))
        .values("month")
        .annotate(revenue=Sum("total_amount"))
        .order_by("month")
    )

    monthly_revenue = _paid_revenue(month_start, today)
    monthly_expenses = _purchase_expenses(month_start, today)

    return {
        "summary": {
            "monthly_revenue": str(monthly_revenue),
            "monthly_expenses": str(monthly_expenses),
            "net_income": str(money(monthly_revenue - monthly_expenses)),
            "total_outstanding": str(money(outstanding)),
            "open_invoices": open_invoices.count(),
        },
        "overdue_invoices": [
            {
                "id": str(inv.id),
                "invoice_number": inv.invoice_number,
                "customer": inv.customer.name,
                "due_date": inv.due_date.isoformat(),
                "balance_due": str(money(inv.balance_due)),
            }
            for inv in overdue
        ],
        "recent_payments": [_payment_row(p) for p in recent_payments],
        "revenue_trends": [
            {"month": row["month"].strftime("%Y-%m"), "revenue": str(money(row["revenue"]))}
            for row in trends
        ],
    }


def income_statement(*, start_date: date, end_date: date) -> dict:
    revenue = _paid_revenue(start_date, end_date)
    expenses = _purchase_expenses(start_date, end_date)
    gross_profit = money(revenue - expenses)

    return {
        "period": {"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        "revenue": str(revenue),
        "expenses": str(expenses),
        "gross_profit": str(gross_profit),
        # no operating expense ledger yet, so net income equals gross profit
        "net_income": str(gross_profit),
    }


def cash_flow(*, start_date: date, end_date: date) -> dict:
    payments = _completed_payments(start_date, end_date)
    inflows = money(payments.aggregate(total=Coalesce(Sum("amount"), _ZERO))["total"])
    outflows = _purchase_expenses(start_date, end_date)

    monthly = (
        payments.annotate(month=TruncMonth("payment_date"))
        .values("month")
        .annotate(inflow=Sum("amount"))
        .order_by("month")
    )

    return {
        "period": {"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        "summary": {
            "cash_inflows": str(inflows),
            "cash_outflows": str(outflows),
            "net_cash_flow": str(money(inflows - outflows)),
        },
        "monthly_flow": [
            {"month": row["month"].strftime("%Y-%m"), "inflow": str(money(row["inflow"]))}
            for row in monthly
        ],
    }


BALANCE_SHEET_SECTIONS = (
    ("assets", Account.AccountType.ASSET),
    ("liabilities", Account.AccountType.LIABILITY),
    ("equity", Account.AccountType.EQUITY),
)


def balance_sheet(*, as_of_date: date | None = None) -> dict:
    """
    Current balances of active asset / liability / equity accounts.

    Balances are stored on the account, so as_of_date only labels the report.
    balance_check holds when assets == liabilities + equity.
    """
    as_of_date = as_of_date or timezone.localdate()
    accounts = Account.objects.filter(is_active=True).order_by("account_code")

    report = {"as_of_date": as_of_date.isoformat()}
    totals = {}
    for key, account_type in BALANCE_SHEET_SECTIONS:
        rows = [a for a in accounts if a.account_type == account_type]
        totals[key] = money(sum((a.balance for a in rows), Decimal("0.00")))
        report[key] = {
            "accounts": [
                {
                    "id": str(a.id),
                    "account_code": a.account_code,
                    "account_name": a.account_name,
                    "balance": str(money(a.balance)),
                }
                for a in rows
            ],
            "total": str(totals[key]),
        }

    liabilities_and_equity = money(totals["liabilities"] + totals["equity"])
    report["total_liabilities_and_equity"] = str(liabilities_and_equity)
    report["balance_check"] = totals["assets"] == liabilities_and_equity
    return report
