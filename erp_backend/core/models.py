# core/models.py

"""
DOCUMENT SEQUENCES

One counter row per (prefix, year). Document numbers are issued by
core.services.sequences inside the caller's transaction, so the counter
and the numbered document commit (or roll back) together.

year = 0 is reserved for non-year-scoped master data codes (CUST-0001).
"""

from django.db import models


class DocumentSequence(models.Model):
    prefix = models.CharField(max_length=16)
    year = models.PositiveIntegerField()
    last_value = models.PositiveIntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["prefix", "-year"]
        constraints = [
            models.UniqueConstraint(
                fields=["prefix", "year"],
                name="uniq_document_sequence_prefix_year",
            ),
        ]

    def __str__(self):
        return f"{self.prefix}/{self.year} -> {self.last_value}"
