# accounting/services/income_statement_service.py

"""
INCOME STATEMENT SERVICE (READ-ONLY)

Sections: revenue, cost, expenses.

Row amount contract: amount = total_credit - total_debit for every row,
in every section (no debit/credit family branching). Expense and cost
rows therefore come out negative when they carry their normal balance;
consumers flip the sign for display.
"""

from __future__ import annotations

from datetime import date
from functools import reduce
from operator import or_
from typing import Optional

from django.db.models import Q

from accounting.balance_rules import (
    COST,
    EXPENSE,
    REVENUE,
    money,
    normalize_account_class,
)
from accounting.models.account import Account
from accounting.services.ledger_source import AccountTotals, account_totals

SECTIONS = (
    ("revenue", REVENUE),
    ("cost", COST),
    ("expenses", EXPENSE),
)


def get_income_statement(
    *, from_date: Optional[date] = None, to_date: Optional[date] = None
) -> dict:
    # Case-insensitive: rows written around MainGroup.clean() may hold "Revenue".
    section_filter = reduce(
        or_, (Q(subgroup__main_group__type__iexact=cls) for _, cls in SECTIONS)
    )
    accounts = list(
        Account.objects.select_related("subgroup__main_group")
        .filter(section_filter)
        .order_by("code")
    )

    totals = account_totals(
        from_date=from_date,
        to_date=to_date,
        account_ids=[a.id for a in accounts],
    )

    data: dict[str, list] = {key: [] for key, _ in SECTIONS}
    section_for_class = {cls: key for key, cls in SECTIONS}

    for acc in accounts:
        t = totals.get(acc.id, AccountTotals())
        section = section_for_class[normalize_account_class(acc.subgroup.main_group.type)]
        data[section].append(
            {
                "code": acc.code,
                "name": acc.name,
                "amount": float(money(t.credit - t.debit)),
                "level": 0,
            }
        )

    return data
