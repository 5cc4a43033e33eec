# accounting/services/ledger_report_service.py

"""
LEDGER REPORTS (READ-ONLY)

- general_journal: posted journal lines, newest first
- ledgers: per-account merged journal + voucher lines with running balance
- general_ledger: per-account transactions + running balance (nested)
- account_groups: dropdown data for the chart

Every running balance starts at the account's opening balance and moves
by calculate_balance_change. Journal lines duplicated by a posted voucher
are dropped by the ledger source.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from django.db.models import Q

from accounting.balance_rules import calculate_balance_change, money
from accounting.models.account import Account
from accounting.models.chart import MainGroup, Subgroup
from accounting.services.ledger_source import iter_ledger_lines, journal_lines_queryset

DEFAULT_PAGE_SIZE = 10

SEARCH_BY_VOUCHER = "voucher"
SEARCH_BY_ACCOUNT = "account"
SEARCH_BY_DESCRIPTION = "description"


def _float(value) -> float:
    return float(money(value))


def _dmy(d: date) -> str:
    return d.strftime("%d/%m/%Y")


def paginate(items: list, *, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    page = max(int(page or 1), 1)
    limit = max(int(limit or DEFAULT_PAGE_SIZE), 1)
    start = (page - 1) * limit
    total = len(items)
    return {
        "data": items[start : start + limit],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": math.ceil(total / limit),
        },
    }


def general_journal(
    *,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    search_by: str | None = None,
    search: str | None = None,
) -> list[dict]:
    qs = journal_lines_queryset(from_date=from_date, to_date=to_date).select_related(
        "journal_entry", "account"
    )

    search = (search or "").strip()
    if search and search_by == SEARCH_BY_VOUCHER:
        qs = qs.filter(journal_entry__entry_no__icontains=search)
    elif search and search_by == SEARCH_BY_ACCOUNT:
        qs = qs.filter(
            Q(account__code__icontains=search) | Q(account__name__icontains=search)
        )
    elif search and search_by == SEARCH_BY_DESCRIPTION:
        qs = qs.filter(
            Q(description__icontains=search)
            | Q(journal_entry__description__icontains=search)
        )

    qs = qs.order_by("-journal_entry__entry_date", "line_order", "id")

    rows = []
    for index, line in enumerate(qs, start=1):
        je = line.journal_entry
        rows.append(
            {
                "id": line.id,
                "tId": index,
                "voucherNo": je.entry_no,
                "date": _dmy(je.entry_date),
                "account": line.account.label,
                "description": line.description or je.description,
                "debit": _float(line.debit),
                "credit": _float(line.credit),
            }
        )
    return rows


def ledgers(
    *,
    main_group: int | None = None,
    sub_group: int | None = None,
    account: int | None = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
) -> list[dict]:
    accounts_qs = Account.objects.select_related("subgroup__main_group").order_by("code")
    if main_group:
        accounts_qs = accounts_qs.filter(subgroup__main_group_id=main_group)
    if sub_group:
        accounts_qs = accounts_qs.filter(subgroup_id=sub_group)
    if account:
        accounts_qs = accounts_qs.filter(id=account)

    accounts = list(accounts_qs)
    if not accounts:
        return []

    by_account: dict[int, list] = {}
    for line in iter_ledger_lines(
        from_date=from_date, to_date=to_date, account_ids=[a.id for a in accounts]
    ):
        by_account.setdefault(line.account_id, []).append(line)

    rows: list[dict] = []
    t_id = 1

    for acc in accounts:
        account_type = acc.subgroup.main_group.type
        running = money(acc.opening_balance)

        if account:
            rows.append(
                {
                    "id": f"opening-balance-{acc.id}",
                    "tId": None,
                    "voucherNo": "-",
                    "timeStamp": "-",
                    "description": "Opening Balance",
                    "debit": None,
                    "credit": None,
                    "balance": _float(running),
                }
            )

        for line in by_account.get(acc.id, []):
            running += calculate_balance_change(line.debit, line.credit, account_type)
            rows.append(
                {
                    "id": f"entry-{line.key}",
                    "tId": t_id,
                    "voucherNo": line.document_number,
                    "timeStamp": _dmy(line.date),
                    "description": line.description,
                    "debit": _float(line.debit) if line.debit > 0 else None,
                    "credit": _float(line.credit) if line.credit > 0 else None,
                    "balance": _float(running),
                }
            )
            t_id += 1

    return rows


def general_ledger(
    *,
    account_code: str | None = None,
    account_type: str | None = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> list[dict]:
    accounts_qs = Account.objects.select_related("subgroup__main_group").order_by("code")
    if account_code:
        accounts_qs = accounts_qs.filter(code__contains=account_code)
    if account_type:
        accounts_qs = accounts_qs.filter(
            subgroup__main_group__type__iexact=account_type.strip()
        )

    accounts = list(accounts_qs)
    if not accounts:
        return []

    by_account: dict[int, list] = {}
    for line in iter_ledger_lines(
        from_date=date_from, to_date=date_to, account_ids=[a.id for a in accounts]
    ):
        by_account.setdefault(line.account_id, []).append(line)

    result = []
    for acc in accounts:
        account_type_value = acc.subgroup.main_group.type
        running = money(acc.opening_balance)
        transactions = []

        for line in by_account.get(acc.id, []):
            running += calculate_balance_change(
                line.debit, line.credit, account_type_value
            )
            transactions.append(
                {
                    "id": line.key,
                    "date": line.date.isoformat(),
                    "journalNo": line.document_number,
                    "reference": line.reference,
                    "description": line.description,
                    "debit": _float(line.debit),
                    "credit": _float(line.credit),
                    "balance": _float(running),
                }
            )

        result.append(
            {
                "code": acc.code,
                "name": acc.name,
                "type": account_type_value,
                "openingBalance": _float(acc.opening_balance),
                "currentBalance": _float(running),
                "transactions": transactions,
            }
        )

    return result


def account_groups() -> dict:
    main_groups = MainGroup.objects.order_by("display_order", "code")
    subgroups = Subgroup.objects.select_related("main_group").order_by("code")
    accounts = Account.objects.select_related("subgroup").order_by("code")

    return {
        "mainGroups": [
            {"id": mg.id, "name": f"{mg.code}-{mg.name}"} for mg in main_groups
        ],
        "subGroups": [
            {"id": sg.id, "name": f"{sg.code}-{sg.name}", "mainGroup": sg.main_group_id}
            for sg in subgroups
        ],
        "accounts": [
            {"id": acc.id, "name": acc.label, "subGroup": acc.subgroup_id}
            for acc in accounts
        ],
    }
