# finance/tests/test_payments.py

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone

from core.exceptions import InvalidStateError, ValidationFailed
from finance.models import Invoice, Payment
from finance.services.invoice_service import create_invoice, update_invoice
from finance.services.payment_service import record_payment
from inventory.models import Product
from sales.models import Customer
from sales.services.order_service import create_sales_order

User = get_user_model()


class PaymentReconcilerTests(TestCase):
    """
    GUARANTEES:
    - paid_amount equals the sum of completed payments
    - status follows pending -> partially_paid -> paid
    - payment_date is stamped when the invoice becomes paid
    - a paid invoice accepts no further payments or edits
    - payments are append-only
    """

    def setUp(self):
        self.accountant = User.objects.create_user(email="acc@example.com", password="pass", role="accountant")
        self.customer = Customer.objects.create(customer_code="CUST-T001", name="Initech")
        self.invoice = create_invoice(
            customer_id=self.customer.id,
            subtotal=Decimal("900.00"),
            tax_amount=Decimal("100.00"),
            user=self.accountant,
        )

    # =====================================================
    # INVOICE CREATION
    # =====================================================

    def test_invoice_defaults(self):
        self.assertRegex(self.invoice.invoice_number, r"^INV-\d{4}-0001$")
        self.assertEqual(self.invoice.total_amount, Decimal("1000.00"))
        self.assertEqual(self.invoice.status, Invoice.STATUS_PENDING)
        self.assertEqual(self.invoice.due_date, self.invoice.invoice_date + timedelta(days=30))

    def test_invoice_amounts_default_from_sales_order(self):
        product = Product.objects.create(sku="BOLT-1", name="Bolt", selling_price=Decimal("10.00"))
        order = create_sales_order(
            customer_id=self.customer.id,
            items=[{"product_id": product.id, "quantity": 10}],
            tax_amount="5.00",
            discount_amount="20.00",
        )

        invoice = create_invoice(sales_order_id=order.id)

        self.assertEqual(invoice.customer_id, self.customer.id)
        self.assertEqual(invoice.subtotal, Decimal("80.00"))
        self.assertEqual(invoice.total_amount, Decimal("85.00"))

    def test_zero_total_is_rejected(self):
        with self.assertRaises(ValidationFailed):
            create_invoice(customer_id=self.customer.id, subtotal=Decimal("0.00"))

    # =====================================================
    # PAYMENTS
    # =====================================================

    def test_partial_then_full_payment(self):
        result = record_payment(invoice_id=self.invoice.id, amount="400.00", payment_method="cash", user=self.accountant)

        self.assertEqual(result.invoice.status, Invoice.STATUS_PARTIALLY_PAID)
        self.assertEqual(result.invoice.paid_amount, Decimal("400.00"))
        self.assertIsNone(result.invoice.payment_date)
        self.assertRegex(result.payment.payment_number, r"^PAY-\d{4}-0001$")

        result = record_payment(invoice_id=self.invoice.id, amount="600.00", payment_method="bank_transfer")

        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.status, Invoice.STATUS_PAID)
        self.assertEqual(self.invoice.paid_amount, Decimal("1000.00"))
        self.assertEqual(self.invoice.payment_date, timezone.localdate())
        self.assertEqual(self.invoice.payments.count(), 2)

    def test_paid_invoice_rejects_further_payments(self):
        record_payment(invoice_id=self.invoice.id, amount="1000.00", payment_method="cash")

        with self.assertRaisesMessage(InvalidStateError, "Invoice is already paid"):
            record_payment(invoice_id=self.invoice.id, amount="1.00", payment_method="cash")

        self.assertEqual(Payment.objects.count(), 1)

    def test_overpayment_marks_invoice_paid(self):
        result = record_payment(invoice_id=self.invoice.id, amount="1200.00", payment_method="check")

        self.assertEqual(result.invoice.status, Invoice.STATUS_PAID)
        self.assertEqual(result.invoice.paid_amount, Decimal("1200.00"))

    def test_invalid_amount_or_method(self):
        with self.assertRaises(ValidationFailed):
            record_payment(invoice_id=self.invoice.id, amount="0", payment_method="cash")
        with self.assertRaises(ValidationFailed):
            record_payment(invoice_id=self.invoice.id, amount="10", payment_method="barter")

    def test_paid_invoice_cannot_be_updated(self):
        record_payment(invoice_id=self.invoice.id, amount="1000.00", payment_method="cash")

        with self.assertRaisesMessage(InvalidStateError, "Cannot update paid invoice"):
            update_invoice(invoice_id=self.invoice.id, changes={"notes": "late edit"})

    def test_total_cannot_drop_below_paid(self):
        record_payment(invoice_id=self.invoice.id, amount="500.00", payment_method="cash")

        with self.assertRaises(ValidationFailed):
            update_invoice(invoice_id=self.invoice.id, changes={"subtotal": Decimal("300.00")})

    def test_lowering_total_to_paid_amount_settles_invoice(self):
        record_payment(invoice_id=self.invoice.id, amount="400.00", payment_method="cash")

        invoice = update_invoice(
            invoice_id=self.invoice.id,
            changes={"subtotal": Decimal("400.00"), "tax_amount": Decimal("0.00")},
        )

        invoice.refresh_from_db()
        self.assertEqual(invoice.total_amount, Decimal("400.00"))
        self.assertEqual(invoice.paid_amount, Decimal("400.00"))
        self.assertEqual(invoice.status, Invoice.STATUS_PAID)
        self.assertEqual(invoice.payment_date, timezone.localdate())

    def test_edit_above_paid_amount_keeps_partial_status(self):
        record_payment(invoice_id=self.invoice.id, amount="400.00", payment_method="cash")

        invoice = update_invoice(invoice_id=self.invoice.id, changes={"subtotal": Decimal("500.00")})

        self.assertEqual(invoice.total_amount, Decimal("600.00"))
        self.assertEqual(invoice.status, Invoice.STATUS_PARTIALLY_PAID)
        self.assertIsNone(invoice.payment_date)

    def test_payments_are_immutable(self):
        payment = record_payment(invoice_id=self.invoice.id, amount="100.00", payment_method="cash").payment

        payment.amount = Decimal("1.00")
        with self.assertRaises(ValidationError):
            payment.save()
        with self.assertRaises(ValidationError):
            payment.delete()
