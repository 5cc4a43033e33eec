# accounting/models/chart.py

"""
======================================================
PATH: accounting/models/chart.py
======================================================
CHART OF ACCOUNTS STRUCTURE

MainGroup -> Subgroup -> Account

Guarantees:
- MainGroup.type is one of the closed account classes (stored lowercase)
- Codes are unique and trimmed
- Fixed groups (seeded structure) are protected by the API layer
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.balance_rules import ACCOUNT_CLASS_CHOICES, ACCOUNT_CLASSES


class MainGroup(models.Model):
    """
    Top-level classification (Current Assets, Capital, Revenues...).
    """

    # Seeded structure: codes 1-9 cannot be edited or deleted.
    FIXED_CODES = frozenset({"1", "2", "3", "4", "5", "6", "7", "8", "9"})

    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=150)

    type = models.CharField(
        max_length=20,
        choices=ACCOUNT_CLASS_CHOICES,
        help_text="Account class driving the balance rule for every account below.",
    )

    display_order = models.PositiveIntegerField(default=0, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["display_order", "code"]
        verbose_name = "Main Group"
        verbose_name_plural = "Main Groups"
        constraints = [
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_main_group_code_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    @property
    def is_fixed(self) -> bool:
        return self.code in self.FIXED_CODES

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()
        self.type = (self.type or "").strip().lower()

        if not self.code:
            raise ValidationError({"code": "Main group code is required"})
        if not self.name:
            raise ValidationError({"name": "Main group name is required"})
        if self.type not in ACCOUNT_CLASSES:
            raise ValidationError(
                {"type": f"type must be one of: {', '.join(ACCOUNT_CLASSES)}"}
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class Subgroup(models.Model):
    """
    Mid-level classification under exactly one MainGroup.
    """

    FIXED_CODES = frozenset(
        {"101", "102", "103", "104", "301", "302", "304", "501", "701", "801", "901"}
    )

    main_group = models.ForeignKey(
        MainGroup,
        on_delete=models.PROTECT,
        related_name="subgroups",
    )

    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=150)

    is_active = models.BooleanField(default=True)
    can_delete = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Subgroup"
        verbose_name_plural = "Subgroups"
        indexes = [
            models.Index(fields=["main_group", "code"], name="subgroup_main_group_code_idx"),
            models.Index(fields=["is_active"], name="subgroup_is_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_subgroup_code_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    @property
    def is_fixed(self) -> bool:
        return self.code in self.FIXED_CODES

    @classmethod
    def overlapping_code(cls, code: str, *, exclude_pk=None) -> str | None:
        """
        Return another subgroup code that is a prefix of `code` (or has `code`
        as its prefix). Account codes start with the subgroup code, so two
        such subgroups would draw from the same code range.
        """
        code = (code or "").strip()
        if not code:
            return None
        others = cls.objects.exclude(pk=exclude_pk).values_list("code", flat=True)
        for other in others:
            if other != code and (other.startswith(code) or code.startswith(other)):
                return other
        return None

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()

        if not self.code:
            raise ValidationError({"code": "Subgroup code is required"})
        if not self.name:
            raise ValidationError({"name": "Subgroup name is required"})

        clash = self.overlapping_code(self.code, exclude_pk=self.pk)
        if clash:
            raise ValidationError(
                {"code": f'Subgroup code "{self.code}" overlaps existing code "{clash}"'}
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
