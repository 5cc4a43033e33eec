# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (ACCOUNTING ENGINE)

This module is the ONLY place allowed to:
- Create JournalEntry / JournalLine
- Enforce debit == credit (before anything is written)
- Move a journal entry from draft to posted
- Trigger the balance projection refresh for posted entries

Entries are created as DRAFT. Only posting makes them count.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from accounting.balance_rules import assert_balanced, money
from accounting.models.account import Account
from accounting.models.journal import JournalEntry, JournalLine
from accounting.services.balance_service import refresh_account_balances
from accounting.services.exceptions import (
    DocumentNumberError,
    DocumentStateError,
    JournalEntryCreationError,
)
from accounting.services.numbering import next_sequence_value

logger = logging.getLogger(__name__)

MIN_LINE_AMOUNT = Decimal("0.01")


def _money(value) -> Decimal:
    try:
        return money(value)
    except ValueError as exc:
        raise JournalEntryCreationError(str(exc)) from exc


def _resolve_account(value) -> Account:
    if isinstance(value, Account):
        return value
    try:
        return Account.objects.get(pk=value)
    except (Account.DoesNotExist, ValueError, TypeError) as exc:
        raise JournalEntryCreationError(f"Account {value!r} does not exist") from exc


def next_entry_number(entry_date: date | None = None) -> str:
    """JV-<year>-<NNN>, sequential within the year."""
    year = (entry_date or timezone.localdate()).year
    return next_sequence_value(
        model=JournalEntry, field="entry_no", prefix=f"JV-{year}-", width=3
    )


def normalize_lines(lines: list) -> list[dict]:
    """
    Validate raw lines into [{account, description, debit, credit}].

    Each line carries exactly one positive side.
    """
    if not lines:
        raise JournalEntryCreationError("Journal entry must contain at least one line")

    normalized: list[dict] = []

    for line in lines:
        if not isinstance(line, dict):
            raise JournalEntryCreationError("Each line must be an object/dict")

        if line.get("account") in (None, ""):
            raise JournalEntryCreationError("Line missing account")

        account = _resolve_account(line["account"])

        debit = _money(line.get("debit"))
        credit = _money(line.get("credit"))

        if debit < 0 or credit < 0:
            raise JournalEntryCreationError("Debit or credit cannot be negative")

        if debit > 0 and credit > 0:
            raise JournalEntryCreationError("A line cannot have both debit and credit")

        if debit == 0 and credit == 0:
            raise JournalEntryCreationError("A line must have either debit or credit")

        if debit > 0 and debit < MIN_LINE_AMOUNT:
            raise JournalEntryCreationError(f"Debit amount too small: {debit}")
        if credit > 0 and credit < MIN_LINE_AMOUNT:
            raise JournalEntryCreationError(f"Credit amount too small: {credit}")

        normalized.append(
            {
                "account": account,
                "description": (line.get("description") or "").strip(),
                "debit": debit,
                "credit": credit,
            }
        )

    return normalized


@transaction.atomic
def create_journal_entry(
    *,
    lines: list,
    entry_date: date | None = None,
    description: str = "",
    reference: str = "",
    entry_no: str | None = None,
    created_by: str = "",
) -> JournalEntry:
    normalized = normalize_lines(lines)
    total_debit, total_credit = assert_balanced(normalized)

    entry_date = entry_date or timezone.localdate()
    entry_no = (entry_no or "").strip() or next_entry_number(entry_date)

    if JournalEntry.objects.filter(entry_no=entry_no).exists():
        raise DocumentNumberError(f"Journal entry {entry_no} already exists")

    try:
        entry = JournalEntry.objects.create(
            entry_no=entry_no,
            entry_date=entry_date,
            description=description or "",
            reference=reference or "",
            status=JournalEntry.STATUS_DRAFT,
            total_debit=total_debit,
            total_credit=total_credit,
            created_by=created_by or "",
        )
    except IntegrityError as exc:
        raise DocumentNumberError(
            f"Journal entry {entry_no} already exists"
        ) from exc

    JournalLine.objects.bulk_create(
        [
            JournalLine(
                journal_entry=entry,
                account=line["account"],
                description=line["description"],
                debit=line["debit"],
                credit=line["credit"],
                line_order=index,
            )
            for index, line in enumerate(normalized)
        ]
    )

    logger.info(
        "Journal entry created",
        extra={"entry_no": entry.entry_no, "total": str(total_debit)},
    )
    return entry


@transaction.atomic
def post_journal_entry(entry: JournalEntry, *, posted_by: str = "") -> JournalEntry:
    entry = JournalEntry.objects.select_for_update().get(pk=entry.pk)

    if entry.is_posted:
        raise DocumentStateError("Journal entry is already posted")

    lines = list(entry.posting_lines())
    assert_balanced(lines)

    entry.status = JournalEntry.STATUS_POSTED
    entry.posted_by = posted_by or ""
    entry.posted_at = timezone.now()
    entry.save()

    refresh_account_balances(line.account_id for line in lines)

    logger.info("Journal entry posted", extra={"entry_no": entry.entry_no})
    return entry
