# inventory/models/inventory_transaction.py

"""
INVENTORY LEDGER

Immutable inventory movement.

GUARANTEES:
- Append-only (no updates, no deletes)
- Direction validated against transaction type
- quantity_after snapshots the stock level right after the movement
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from .inventory_item import InventoryItem


class InventoryTransaction(models.Model):
    class Direction(models.TextChoices):
        IN = "in", "Stock In"
        OUT = "out", "Stock Out"

    class TransactionType(models.TextChoices):
        RECEIPT = "receipt", "Receipt"
        ISSUE = "issue", "Issue"
        ADJUSTMENT = "adjustment", "Adjustment"
        RETURN = "return", "Return"

    TYPE_TO_DIRECTION = {
        TransactionType.RECEIPT: Direction.IN,
        TransactionType.RETURN: Direction.IN,
        TransactionType.ISSUE: Direction.OUT,
        TransactionType.ADJUSTMENT: None,
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    item = models.ForeignKey(
        InventoryItem,
        on_delete=models.PROTECT,
        related_name="transactions",
    )

    transaction_type = models.CharField(max_length=20, choices=TransactionType.choices)
    direction = models.CharField(max_length=3, choices=Direction.choices)

    quantity = models.PositiveIntegerField()
    quantity_after = models.IntegerField()

    unit_cost = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    reference = models.CharField(max_length=64, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="inventory_transactions",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["item", "created_at"], name="inv_txn_item_created_idx"),
            models.Index(fields=["transaction_type"], name="inv_txn_type_idx"),
            models.Index(fields=["reference"], name="inv_txn_reference_idx"),
        ]

    def clean(self):
        if not self.quantity or self.quantity <= 0:
            raise ValidationError("quantity must be greater than zero")

        expected = self.TYPE_TO_DIRECTION.get(self.transaction_type)
        if expected and self.direction != expected:
            raise ValidationError(
                f"{self.transaction_type} requires direction={expected}"
            )

        if self.quantity_after is not None and self.quantity_after < 0:
            raise ValidationError("quantity_after cannot be negative")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("InventoryTransaction records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "InventoryTransaction records are immutable and cannot be deleted"
        )

    def __str__(self):
        return f"{self.item.product.sku} | {self.transaction_type} | {self.quantity}"
