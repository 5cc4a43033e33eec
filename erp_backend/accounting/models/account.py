# accounting/models/account.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.models.chart import Subgroup


class Account(models.Model):
    """
    Leaf ledger account inside a Subgroup.

    Guarantees:
    - Account codes are globally unique and start with the subgroup code
    - Code + name are normalized (trimmed)
    - current_balance is a projection of the ledger (refreshed by the
      balance service after postings), never an independent counter
    """

    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_INACTIVE, "Inactive"),
    ]

    subgroup = models.ForeignKey(
        Subgroup,
        on_delete=models.PROTECT,
        related_name="accounts",
    )

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=150)
    description = models.CharField(max_length=255, blank=True, default="")

    opening_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    current_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Ledger projection (opening balance + posted activity)",
    )

    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_ACTIVE,
    )

    can_delete = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["subgroup", "code"], name="account_subgroup_code_idx"),
            models.Index(fields=["status"], name="account_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_account_code_not_blank",
            ),
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_account_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    @property
    def label(self) -> str:
        return f"{self.code}-{self.name}"

    @property
    def account_class(self) -> str:
        return self.subgroup.main_group.type

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()

        if not self.code:
            raise ValidationError({"code": "Account code is required"})
        if not self.name:
            raise ValidationError({"name": "Account name is required"})

        if self.subgroup_id:
            prefix = (self.subgroup.code or "").strip()
            if not prefix:
                raise ValidationError(
                    {"subgroup": "Subgroup does not have a code. Add a code to the subgroup first."}
                )
            if not self.code.startswith(prefix):
                raise ValidationError(
                    {
                        "code": f'Account code must start with subgroup code "{prefix}". '
                        f'Provided code "{self.code}" does not match.'
                    }
                )

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
