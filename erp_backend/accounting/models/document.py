# accounting/models/document.py

"""
======================================================
PATH: accounting/models/document.py
======================================================
LEDGER DOCUMENT BASE

Shared shape of the two ledger document kinds:
- JournalEntry (+ JournalLine)
- Voucher (+ VoucherEntry)

Common posting interface:
- document_number / document_date
- status (draft | posted); only POSTED documents count in balances
- total_debit / total_credit persisted at construction
- posting_lines(): the document's lines in order

Guarantees:
- Once posted in the DB a document is immutable (one-time draft -> posted
  transition is still allowed)
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class LedgerDocument(models.Model):
    SOURCE = ""

    STATUS_DRAFT = "draft"
    STATUS_POSTED = "posted"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_POSTED, "Posted"),
    ]

    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT,
        db_index=True,
    )

    total_debit = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    total_credit = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    created_by = models.CharField(max_length=100, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    @property
    def is_posted(self) -> bool:
        return self.status == self.STATUS_POSTED

    @property
    def document_number(self) -> str:
        raise NotImplementedError

    @property
    def document_date(self):
        raise NotImplementedError

    def posting_lines(self):
        raise NotImplementedError

    def _posted_in_db(self) -> bool:
        if not self.pk:
            return False
        return type(self).objects.filter(
            pk=self.pk, status=self.STATUS_POSTED
        ).exists()

    def save(self, *args, **kwargs):
        if self._posted_in_db():
            raise ValidationError(
                f"{type(self).__name__} records are immutable once posted"
            )
        self.full_clean()
        return super().save(*args, **kwargs)
