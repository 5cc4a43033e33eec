# accounting/services/ledger_source.py

"""
UNIFIED LEDGER SOURCE (READ-ONLY)

One place that knows the two ledger document kinds (JournalEntry, Voucher)
and how they combine:

- Only POSTED documents count
- Posted vouchers are the source of truth; a posted JournalEntry whose
  entry_no equals a posted voucher_number (in the same window) is the
  same transaction and is excluded
- Date windows are inclusive on both ends (document dates are dates)

Every report and the balance projection read lines through this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from django.db.models import Sum
from django.db.models.functions import Coalesce

from accounting.balance_rules import ZERO, money
from accounting.models.journal import JournalEntry, JournalLine
from accounting.models.voucher import Voucher, VoucherEntry


@dataclass(frozen=True)
class LedgerLine:
    """One posting line, tagged with the document kind it came from."""

    source: str
    line_id: int
    account_id: int
    document_id: int
    document_number: str
    date: date
    reference: str
    description: str
    debit: Decimal
    credit: Decimal
    order: int

    @property
    def key(self) -> str:
        return f"{self.source}-{self.line_id}"


@dataclass(frozen=True)
class AccountTotals:
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    def __add__(self, other: "AccountTotals") -> "AccountTotals":
        return AccountTotals(
            debit=money(self.debit + other.debit),
            credit=money(self.credit + other.credit),
        )


def _window(prefix: str, *, from_date: Optional[date], to_date: Optional[date]) -> dict:
    filters = {}
    if from_date is not None:
        filters[f"{prefix}__gte"] = from_date
    if to_date is not None:
        filters[f"{prefix}__lte"] = to_date
    return filters


def posted_voucher_numbers(
    *, from_date: Optional[date] = None, to_date: Optional[date] = None
) -> set[str]:
    return set(
        Voucher.objects.filter(
            status=Voucher.STATUS_POSTED,
            **_window("date", from_date=from_date, to_date=to_date),
        ).values_list("voucher_number", flat=True)
    )


def journal_lines_queryset(
    *,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    account_ids: Optional[Iterable[int]] = None,
    exclude_numbers: Optional[set[str]] = None,
):
    qs = JournalLine.objects.filter(
        journal_entry__status=JournalEntry.STATUS_POSTED,
        **_window("journal_entry__entry_date", from_date=from_date, to_date=to_date),
    )
    if exclude_numbers:
        qs = qs.exclude(journal_entry__entry_no__in=exclude_numbers)
    if account_ids is not None:
        qs = qs.filter(account_id__in=list(account_ids))
    return qs


def voucher_entries_queryset(
    *,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    account_ids: Optional[Iterable[int]] = None,
):
    qs = VoucherEntry.objects.filter(
        voucher__status=Voucher.STATUS_POSTED,
        account__isnull=False,
        **_window("voucher__date", from_date=from_date, to_date=to_date),
    )
    if account_ids is not None:
        qs = qs.filter(account_id__in=list(account_ids))
    return qs


def _sum_by_account(qs) -> dict[int, AccountTotals]:
    rows = qs.values("account_id").annotate(
        debit_total=Coalesce(Sum("debit"), ZERO),
        credit_total=Coalesce(Sum("credit"), ZERO),
    )
    return {
        r["account_id"]: AccountTotals(
            debit=money(r["debit_total"]), credit=money(r["credit_total"])
        )
        for r in rows
    }


def account_totals(
    *,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    account_ids: Optional[Iterable[int]] = None,
) -> dict[int, AccountTotals]:
    """
    Bulk debit/credit totals per account (no N+1), deduplicated.
    Accounts without activity are absent from the result.
    """
    if account_ids is not None:
        account_ids = list(account_ids)

    exclude = posted_voucher_numbers(from_date=from_date, to_date=to_date)

    journal = _sum_by_account(
        journal_lines_queryset(
            from_date=from_date,
            to_date=to_date,
            account_ids=account_ids,
            exclude_numbers=exclude,
        )
    )
    vouchers = _sum_by_account(
        voucher_entries_queryset(
            from_date=from_date, to_date=to_date, account_ids=account_ids
        )
    )

    totals: dict[int, AccountTotals] = {}
    for acc_id in set(journal) | set(vouchers):
        totals[acc_id] = journal.get(acc_id, AccountTotals()) + vouchers.get(
            acc_id, AccountTotals()
        )
    return totals


def iter_ledger_lines(
    *,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    account_ids: Optional[Iterable[int]] = None,
) -> list[LedgerLine]:
    """
    Merged, deduplicated posting lines ordered by date, document number,
    then line order.
    """
    if account_ids is not None:
        account_ids = list(account_ids)

    exclude = posted_voucher_numbers(from_date=from_date, to_date=to_date)

    lines: list[LedgerLine] = []

    journal_qs = journal_lines_queryset(
        from_date=from_date,
        to_date=to_date,
        account_ids=account_ids,
        exclude_numbers=exclude,
    ).select_related("journal_entry")

    for line in journal_qs:
        je = line.journal_entry
        lines.append(
            LedgerLine(
                source=JournalEntry.SOURCE,
                line_id=line.id,
                account_id=line.account_id,
                document_id=je.id,
                document_number=je.entry_no,
                date=je.entry_date,
                reference=je.reference,
                description=line.description or je.description,
                debit=money(line.debit),
                credit=money(line.credit),
                order=line.line_order,
            )
        )

    voucher_qs = voucher_entries_queryset(
        from_date=from_date, to_date=to_date, account_ids=account_ids
    ).select_related("voucher")

    for entry in voucher_qs:
        v = entry.voucher
        lines.append(
            LedgerLine(
                source=Voucher.SOURCE,
                line_id=entry.id,
                account_id=entry.account_id,
                document_id=v.id,
                document_number=v.voucher_number,
                date=v.date,
                reference=v.narration,
                description=entry.description or v.narration,
                debit=money(entry.debit),
                credit=money(entry.credit),
                order=entry.sort_order,
            )
        )

    lines.sort(key=lambda l: (l.date, l.document_number, l.order, l.line_id))
    return lines
