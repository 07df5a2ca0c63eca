# inventory/models/inventory_item.py

"""
STOCK RECORD (one per product)

- quantity_on_hand is service-managed only (inventory.services.stock)
- quantity_on_hand >= 0 (model + DB constraint)
- created on first receipt with the configured default thresholds
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .product import Product


class InventoryItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.OneToOneField(
        Product,
        on_delete=models.PROTECT,
        related_name="inventory_item",
    )

    quantity_on_hand = models.IntegerField(default=0)

    minimum_stock_level = models.PositiveIntegerField(default=0)
    maximum_stock_level = models.PositiveIntegerField(default=0)
    reorder_point = models.PositiveIntegerField(default=0)

    location = models.CharField(max_length=120, blank=True, default="")

    # Weighted average cost of the units on hand.
    unit_cost = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    last_received_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["product__name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity_on_hand__gte=0),
                name="inventory_item_quantity_nonnegative",
            ),
        ]

    def clean(self):
        if self.quantity_on_hand is not None and self.quantity_on_hand < 0:
            raise ValidationError({"quantity_on_hand": "quantity_on_hand cannot be negative"})

        if (
            self.maximum_stock_level
            and self.minimum_stock_level
            and self.minimum_stock_level > self.maximum_stock_level
        ):
            raise ValidationError(
                {"minimum_stock_level": "minimum_stock_level cannot exceed maximum_stock_level"}
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def is_low_stock(self) -> bool:
        return int(self.quantity_on_hand or 0) <= int(self.minimum_stock_level or 0)

    @property
    def needs_reorder(self) -> bool:
        return int(self.quantity_on_hand or 0) <= int(self.reorder_point or 0)

    @property
    def stock_value(self) -> Decimal:
        return (self.unit_cost or Decimal("0.00")) * Decimal(int(self.quantity_on_hand or 0))

    def __str__(self):
        return f"{self.product} @ {self.location or '-'}: {self.quantity_on_hand}"
