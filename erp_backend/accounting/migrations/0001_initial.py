"""
======================================================
PATH: accounting/migrations/0001_initial.py
======================================================
MIGRATION: GENERAL LEDGER SCHEMA

Creates:
- MainGroup -> Subgroup -> Account (chart of accounts)
- JournalEntry + JournalLine (legacy ledger document)
- Voucher + VoucherEntry (primary ledger document)
"""

from __future__ import annotations

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


def _money_field(**kwargs):
    return models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00"), **kwargs
    )


def _non_negative_money_field():
    return _money_field(
        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))]
    )


DOCUMENT_STATUS_CHOICES = [("draft", "Draft"), ("posted", "Posted")]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MainGroup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=10, unique=True)),
                ("name", models.CharField(max_length=150)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("asset", "Asset"),
                            ("liability", "Liability"),
                            ("equity", "Equity"),
                            ("revenue", "Revenue"),
                            ("expense", "Expense"),
                            ("cost", "Cost"),
                        ],
                        help_text="Account class driving the balance rule for every account below.",
                        max_length=20,
                    ),
                ),
                ("display_order", models.PositiveIntegerField(db_index=True, default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Main Group",
                "verbose_name_plural": "Main Groups",
                "ordering": ["display_order", "code"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("code", ""), _negated=True),
                        name="chk_main_group_code_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Subgroup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=10, unique=True)),
                ("name", models.CharField(max_length=150)),
                ("is_active", models.BooleanField(default=True)),
                ("can_delete", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "main_group",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="subgroups",
                        to="accounting.maingroup",
                    ),
                ),
            ],
            options={
                "verbose_name": "Subgroup",
                "verbose_name_plural": "Subgroups",
                "ordering": ["code"],
                "indexes": [
                    models.Index(fields=["main_group", "code"], name="subgroup_main_group_code_idx"),
                    models.Index(fields=["is_active"], name="subgroup_is_active_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("code", ""), _negated=True),
                        name="chk_subgroup_code_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=150)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("opening_balance", _money_field()),
                (
                    "current_balance",
                    _money_field(help_text="Ledger projection (opening balance + posted activity)"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=10,
                    ),
                ),
                ("can_delete", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "subgroup",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounts",
                        to="accounting.subgroup",
                    ),
                ),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "ordering": ["code"],
                "indexes": [
                    models.Index(fields=["subgroup", "code"], name="account_subgroup_code_idx"),
                    models.Index(fields=["status"], name="account_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("code", ""), _negated=True),
                        name="chk_account_code_not_blank",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("name", ""), _negated=True),
                        name="chk_account_name_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=DOCUMENT_STATUS_CHOICES,
                        db_index=True,
                        default="draft",
                        max_length=10,
                    ),
                ),
                ("total_debit", _money_field()),
                ("total_credit", _money_field()),
                ("created_by", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("entry_no", models.CharField(max_length=50, unique=True)),
                ("entry_date", models.DateField(default=django.utils.timezone.localdate)),
                ("reference", models.CharField(blank=True, default="", max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("posted_by", models.CharField(blank=True, default="", max_length=100)),
                ("posted_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "ordering": ["-entry_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["entry_date"], name="journal_entry_date_idx"),
                    models.Index(fields=["status", "entry_date"], name="journal_status_date_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("debit", _non_negative_money_field()),
                ("credit", _non_negative_money_field()),
                ("line_order", models.PositiveIntegerField(default=0)),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="accounting.journalentry",
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Line",
                "verbose_name_plural": "Journal Lines",
                "ordering": ["line_order", "id"],
                "indexes": [
                    models.Index(fields=["account"], name="journal_line_account_idx"),
                    models.Index(fields=["journal_entry", "line_order"], name="journal_line_order_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("debit__gte", 0), ("credit__gte", 0)),
                        name="chk_journal_line_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Voucher",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=DOCUMENT_STATUS_CHOICES,
                        db_index=True,
                        default="draft",
                        max_length=10,
                    ),
                ),
                ("total_debit", _money_field()),
                ("total_credit", _money_field()),
                ("created_by", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("voucher_number", models.CharField(max_length=50, unique=True)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("payment", "Payment"),
                            ("receipt", "Receipt"),
                            ("journal", "Journal"),
                            ("contra", "Contra"),
                        ],
                        max_length=20,
                    ),
                ),
                ("date", models.DateField(default=django.utils.timezone.localdate)),
                ("narration", models.TextField(blank=True, default="")),
                ("cash_bank_account", models.CharField(blank=True, default="", max_length=150)),
                ("cheque_number", models.CharField(blank=True, default="", max_length=50)),
                ("cheque_date", models.DateField(blank=True, null=True)),
                ("approved_by", models.CharField(blank=True, default="", max_length=100)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "Voucher",
                "verbose_name_plural": "Vouchers",
                "ordering": ["-date", "-created_at"],
                "indexes": [
                    models.Index(fields=["date"], name="voucher_date_idx"),
                    models.Index(fields=["status", "date"], name="voucher_status_date_idx"),
                    models.Index(fields=["type"], name="voucher_type_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="VoucherEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("account_name", models.CharField(blank=True, default="", max_length=200)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("debit", _non_negative_money_field()),
                ("credit", _non_negative_money_field()),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "voucher",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="entries",
                        to="accounting.voucher",
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="voucher_entries",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "verbose_name": "Voucher Entry",
                "verbose_name_plural": "Voucher Entries",
                "ordering": ["sort_order", "id"],
                "indexes": [
                    models.Index(fields=["account"], name="voucher_entry_account_idx"),
                    models.Index(fields=["voucher", "sort_order"], name="voucher_entry_order_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("debit__gte", 0), ("credit__gte", 0)),
                        name="chk_voucher_entry_non_negative",
                    ),
                ],
            },
        ),
    ]
