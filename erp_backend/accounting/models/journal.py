# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL (legacy ledger document)

JournalEntry owns an ordered set of JournalLines.

Guarantees:
- entry_no is unique (JV-<year>-<NNN>)
- Immutable once posted
- A journal entry whose entry_no matches a posted Voucher number is the
  same business transaction; reports count the Voucher only
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from accounting.models.account import Account
from accounting.models.document import LedgerDocument


class JournalEntry(LedgerDocument):
    SOURCE = "journal"

    entry_no = models.CharField(max_length=50, unique=True)
    entry_date = models.DateField(default=timezone.localdate)

    reference = models.CharField(max_length=100, blank=True, default="")
    description = models.TextField(blank=True, default="")

    posted_by = models.CharField(max_length=100, blank=True, default="")
    posted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-entry_date", "-created_at"]
        indexes = [
            models.Index(fields=["entry_date"], name="journal_entry_date_idx"),
            models.Index(fields=["status", "entry_date"], name="journal_status_date_idx"),
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"{self.entry_no} – {self.entry_date}"

    @property
    def document_number(self) -> str:
        return self.entry_no

    @property
    def document_date(self):
        return self.entry_date

    def posting_lines(self):
        return self.lines.select_related("account__subgroup__main_group").order_by(
            "line_order", "id"
        )

    def clean(self):
        self.entry_no = (self.entry_no or "").strip()
        self.reference = (self.reference or "").strip()
        self.description = (self.description or "").strip()

        if not self.entry_no:
            raise ValidationError({"entry_no": "Journal entry number is required"})


class JournalLine(models.Model):
    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.CASCADE,
        related_name="lines",
    )

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="journal_lines",
    )

    description = models.CharField(max_length=255, blank=True, default="")

    debit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    credit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    line_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["line_order", "id"]
        indexes = [
            models.Index(fields=["account"], name="journal_line_account_idx"),
            models.Index(fields=["journal_entry", "line_order"], name="journal_line_order_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(debit__gte=0) & Q(credit__gte=0),
                name="chk_journal_line_non_negative",
            ),
        ]
        verbose_name = "Journal Line"
        verbose_name_plural = "Journal Lines"

    def __str__(self):
        return f"{self.account} Dr {self.debit} Cr {self.credit}"
