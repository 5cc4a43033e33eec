# accounting/models/voucher.py

"""
======================================================
PATH: accounting/models/voucher.py
======================================================
VOUCHER MODEL (primary ledger document)

Voucher owns an ordered set of VoucherEntries. Posted vouchers are the
source of truth for reporting; journal entries sharing a voucher number
are excluded from totals.
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


class Voucher(LedgerDocument):
    SOURCE = "voucher"

    TYPE_PAYMENT = "payment"
    TYPE_RECEIPT = "receipt"
    TYPE_JOURNAL = "journal"
    TYPE_CONTRA = "contra"

    TYPE_CHOICES = [
        (TYPE_PAYMENT, "Payment"),
        (TYPE_RECEIPT, "Receipt"),
        (TYPE_JOURNAL, "Journal"),
        (TYPE_CONTRA, "Contra"),
    ]
    TYPES = frozenset(value for value, _ in TYPE_CHOICES)

    # List filters accept the numeric ids the SPA sends.
    NUMERIC_TYPE_ALIASES = {
        "1": TYPE_PAYMENT,
        "2": TYPE_RECEIPT,
        "3": TYPE_JOURNAL,
    }

    voucher_number = models.CharField(max_length=50, unique=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    date = models.DateField(default=timezone.localdate)

    narration = models.TextField(blank=True, default="")
    cash_bank_account = models.CharField(max_length=150, blank=True, default="")
    cheque_number = models.CharField(max_length=50, blank=True, default="")
    cheque_date = models.DateField(null=True, blank=True)

    approved_by = models.CharField(max_length=100, blank=True, default="")
    approved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-date", "-created_at"]
        indexes = [
            models.Index(fields=["date"], name="voucher_date_idx"),
            models.Index(fields=["status", "date"], name="voucher_status_date_idx"),
            models.Index(fields=["type"], name="voucher_type_idx"),
        ]
        verbose_name = "Voucher"
        verbose_name_plural = "Vouchers"

    def __str__(self):
        return f"{self.voucher_number} ({self.type}) – {self.date}"

    @property
    def document_number(self) -> str:
        return self.voucher_number

    @property
    def document_date(self):
        return self.date

    def posting_lines(self):
        return self.entries.select_related("account__subgroup__main_group").order_by(
            "sort_order", "id"
        )

    def clean(self):
        self.voucher_number = (self.voucher_number or "").strip()
        self.narration = (self.narration or "").strip()

        if not self.voucher_number:
            raise ValidationError({"voucher_number": "Voucher number is required"})


class VoucherEntry(models.Model):
    voucher = models.ForeignKey(
        Voucher,
        on_delete=models.CASCADE,
        related_name="entries",
    )

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="voucher_entries",
        null=True,
        blank=True,
    )

    # Display label captured at entry time ("<code>-<name>")
    account_name = models.CharField(max_length=200, blank=True, default="")
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

    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]
        indexes = [
            models.Index(fields=["account"], name="voucher_entry_account_idx"),
            models.Index(fields=["voucher", "sort_order"], name="voucher_entry_order_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(debit__gte=0) & Q(credit__gte=0),
                name="chk_voucher_entry_non_negative",
            ),
        ]
        verbose_name = "Voucher Entry"
        verbose_name_plural = "Voucher Entries"

    def __str__(self):
        return f"{self.account_name or self.account} Dr {self.debit} Cr {self.credit}"
