# accounting/services/voucher_service.py

"""
======================================================
PATH: accounting/services/voucher_service.py
======================================================
VOUCHER SERVICE

Rules:
- Vouchers are validated as balanced BEFORE any row is written
- Only DRAFT vouchers can be edited; posted vouchers are immutable
- Posting (draft -> posted) refreshes the balance projection of every
  account the voucher touches
- Deleting a voucher also deletes journal entries carrying the same
  number (they describe the same transaction), then refreshes balances
- System vouchers (auto-posted by partner setup) are numbered JV-<NNNN>
"""

from __future__ import annotations

import logging
from datetime import date

from django.db import IntegrityError, transaction
from django.utils import timezone

from accounting.balance_rules import assert_balanced, money
from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.models.voucher import Voucher, VoucherEntry
from accounting.services.balance_service import refresh_account_balances
from accounting.services.exceptions import (
    DocumentNumberError,
    DocumentStateError,
    VoucherError,
)
from accounting.services.numbering import next_sequence_value

logger = logging.getLogger(__name__)

VOUCHER_FIELDS = (
    "type",
    "date",
    "narration",
    "cash_bank_account",
    "cheque_number",
    "cheque_date",
)


def normalize_voucher_type(value) -> str | None:
    """
    Accepts a type name or one of the numeric aliases. "all"/blank -> None.
    """
    raw = str(value or "").strip()
    if not raw or raw.lower() == "all":
        return None
    if raw in Voucher.NUMERIC_TYPE_ALIASES:
        return Voucher.NUMERIC_TYPE_ALIASES[raw]
    return raw.lower()


def next_system_voucher_number() -> str:
    return next_sequence_value(
        model=Voucher, field="voucher_number", prefix="JV-", width=4
    )


def _normalize_entries(entries: list) -> list[dict]:
    if not entries:
        raise VoucherError("At least one entry is required")

    normalized = []
    for index, entry in enumerate(entries):
        account = entry.get("account")
        if account is not None and not isinstance(account, Account):
            try:
                account = Account.objects.get(pk=account)
            except (Account.DoesNotExist, ValueError, TypeError) as exc:
                raise VoucherError(f"Account {account!r} does not exist") from exc

        debit = money(entry.get("debit"))
        credit = money(entry.get("credit"))
        if debit < 0 or credit < 0:
            raise VoucherError("Debit or credit cannot be negative")

        account_name = (entry.get("account_name") or "").strip()
        if not account_name:
            account_name = account.label if account is not None else "Account"

        sort_order = entry.get("sort_order")
        normalized.append(
            {
                "account": account,
                "account_name": account_name,
                "description": (entry.get("description") or "").strip(),
                "debit": debit,
                "credit": credit,
                "sort_order": index if sort_order is None else sort_order,
            }
        )
    return normalized


def _write_entries(voucher: Voucher, entries: list[dict]) -> None:
    VoucherEntry.objects.bulk_create(
        [VoucherEntry(voucher=voucher, **entry) for entry in entries]
    )


def _touched_account_ids(voucher: Voucher) -> list[int]:
    return [
        acc_id
        for acc_id in voucher.entries.values_list("account_id", flat=True)
        if acc_id is not None
    ]


@transaction.atomic
def create_voucher(
    *,
    voucher_number: str,
    type: str,
    date: date,
    entries: list,
    narration: str = "",
    cash_bank_account: str = "",
    cheque_number: str = "",
    cheque_date: date | None = None,
    status: str = Voucher.STATUS_DRAFT,
    created_by: str = "",
) -> Voucher:
    voucher_number = (voucher_number or "").strip()
    if not voucher_number or not type or not date:
        raise VoucherError("Voucher number, type, and date are required")

    voucher_type = normalize_voucher_type(type)
    if voucher_type not in Voucher.TYPES:
        raise VoucherError(f"Unknown voucher type: {type}")

    normalized = _normalize_entries(entries)
    total_debit, total_credit = assert_balanced(normalized)

    if Voucher.objects.filter(voucher_number=voucher_number).exists():
        raise DocumentNumberError(f"Voucher {voucher_number} already exists")

    try:
        voucher = Voucher.objects.create(
            voucher_number=voucher_number,
            type=voucher_type,
            date=date,
            narration=narration or "",
            cash_bank_account=cash_bank_account or "",
            cheque_number=cheque_number or "",
            cheque_date=cheque_date,
            total_debit=total_debit,
            total_credit=total_credit,
            status=Voucher.STATUS_DRAFT,
            created_by=created_by or "",
        )
    except IntegrityError as exc:
        raise DocumentNumberError(f"Voucher {voucher_number} already exists") from exc

    _write_entries(voucher, normalized)

    logger.info(
        "Voucher created",
        extra={"voucher_number": voucher.voucher_number, "total": str(total_debit)},
    )

    if status == Voucher.STATUS_POSTED:
        voucher = post_voucher(voucher, approved_by=created_by)

    return voucher


@transaction.atomic
def update_voucher(voucher: Voucher, *, entries: list | None = None, **fields) -> Voucher:
    voucher = Voucher.objects.select_for_update().get(pk=voucher.pk)

    if voucher.is_posted:
        raise DocumentStateError("Only draft vouchers can be edited")

    for name in VOUCHER_FIELDS:
        if name in fields and fields[name] is not None:
            value = fields[name]
            if name == "type":
                value = normalize_voucher_type(value)
                if value not in Voucher.TYPES:
                    raise VoucherError(f"Unknown voucher type: {fields[name]}")
            setattr(voucher, name, value)

    if entries is not None:
        normalized = _normalize_entries(entries)
        voucher.total_debit, voucher.total_credit = assert_balanced(normalized)
        voucher.entries.all().delete()
        _write_entries(voucher, normalized)

    voucher.save()

    if fields.get("status") == Voucher.STATUS_POSTED:
        voucher = post_voucher(voucher, approved_by=fields.get("approved_by") or "")

    return voucher


@transaction.atomic
def post_voucher(voucher: Voucher, *, approved_by: str = "") -> Voucher:
    voucher = Voucher.objects.select_for_update().get(pk=voucher.pk)

    if voucher.is_posted:
        raise DocumentStateError("Voucher is already posted")

    lines = list(voucher.posting_lines())
    assert_balanced(lines)

    voucher.status = Voucher.STATUS_POSTED
    voucher.approved_by = approved_by or ""
    voucher.approved_at = timezone.now()
    voucher.save()

    refresh_account_balances(_touched_account_ids(voucher))

    logger.info("Voucher posted", extra={"voucher_number": voucher.voucher_number})
    return voucher


@transaction.atomic
def delete_voucher(voucher: Voucher) -> dict:
    """
    Remove the voucher and any journal entries sharing its number.
    Balances are recomputed from what remains in the ledger.
    """
    affected = set(_touched_account_ids(voucher))
    was_posted = voucher.is_posted

    journals = list(
        JournalEntry.objects.filter(entry_no=voucher.voucher_number).prefetch_related(
            "lines"
        )
    )
    for je in journals:
        affected.update(line.account_id for line in je.lines.all())

    # Journal lines and voucher entries cascade.
    for je in journals:
        je.delete()

    number = voucher.voucher_number
    voucher.delete()

    refresh_account_balances(affected)

    logger.info(
        "Voucher deleted",
        extra={"voucher_number": number, "deleted_journal_entries": len(journals)},
    )

    return {
        "message": "Voucher deleted successfully",
        "reversedAccounts": len(affected) if was_posted else 0,
        "deletedJournalEntries": len(journals),
    }


@transaction.atomic
def create_system_voucher(
    *,
    type: str,
    entries: list,
    narration: str = "",
    date: date | None = None,
    created_by: str = "system",
) -> Voucher:
    """
    Auto-numbered, immediately posted voucher (opening balances and other
    system postings).
    """
    return create_voucher(
        voucher_number=next_system_voucher_number(),
        type=type,
        date=date or timezone.localdate(),
        entries=entries,
        narration=narration,
        status=Voucher.STATUS_POSTED,
        created_by=created_by,
    )
