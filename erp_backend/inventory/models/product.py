# inventory/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Product(models.Model):
    """
    Item master shared by every module (BOM-free).

    STOCK MODEL (IMPORTANT):
    - Product itself does NOT store stock
    - Stock lives in InventoryItem (one per product)
    - Stock only moves through inventory.services.stock
    """

    class ProductType(models.TextChoices):
        FINISHED_GOOD = "finished_good", "Finished Good"
        RAW_MATERIAL = "raw_material", "Raw Material"
        WORK_IN_PROGRESS = "work_in_progress", "Work In Progress"
        COMPONENT = "component", "Component"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sku = models.CharField(max_length=64, unique=True, db_index=True)
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")

    product_type = models.CharField(
        max_length=32,
        choices=ProductType.choices,
        default=ProductType.FINISHED_GOOD,
    )
    unit_of_measure = models.CharField(max_length=32, default="pcs")

    standard_cost = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    selling_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["product_type"], name="inv_product_type_idx"),
            models.Index(fields=["is_active"], name="inv_product_active_idx"),
        ]

    def clean(self):
        self.sku = (self.sku or "").strip().upper()
        if not self.sku:
            raise ValidationError({"sku": "sku is required"})

        if self.standard_cost is not None and self.standard_cost < 0:
            raise ValidationError({"standard_cost": "standard_cost cannot be negative"})
        if self.selling_price is not None and self.selling_price < 0:
            raise ValidationError({"selling_price": "selling_price cannot be negative"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.sku} - {self.name}"
