# finance/models/account.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Account(models.Model):
    """
    Chart of accounts entry.

    INVARIANTS:
    - account_code is unique
    - a sub-account has the same account_type as its parent
    - accounts are deactivated, never deleted
    """

    class AccountType(models.TextChoices):
        ASSET = "asset", "Asset"
        LIABILITY = "liability", "Liability"
        EQUITY = "equity", "Equity"
        REVENUE = "revenue", "Revenue"
        EXPENSE = "expense", "Expense"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    account_code = models.CharField(max_length=32, unique=True)
    account_name = models.CharField(max_length=200)
    account_type = models.CharField(max_length=16, choices=AccountType.choices)
    parent_account = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="sub_accounts",
    )

    balance = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["account_code"]
        indexes = [
            models.Index(fields=["account_type", "is_active"], name="fin_account_type_idx"),
        ]

    def clean(self):
        parent = self.parent_account
        if parent is None:
            return
        if parent.pk == self.pk:
            raise ValidationError({"parent_account": "An account cannot be its own parent"})
        if parent.account_type != self.account_type:
            raise ValidationError({"parent_account": "Parent account must have the same account_type"})

    def __str__(self):
        return f"{self.account_code} | {self.account_name}"
