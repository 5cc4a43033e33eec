# accounting/services/balance_sheet_service.py

"""
BALANCE SHEET SERVICE

Pure accounting read service.

Responsibilities:
- Compute balances per account as at a given date (inclusive)
- Group Assets, Liabilities and Capital as MainGroup -> Subgroup -> Account
- Summarize Revenue, Expense and Cost activity into rev_exp
  (revenue - expense - cost) so the sheet can be reconciled

Rules:
- Every balance goes through the single balance rule (signed on the
  account's natural side)
- Only ACTIVE subgroups are listed
- Accounts with zero balance are included (frontend filters)
"""

from __future__ import annotations

from datetime import date as date_cls
from decimal import Decimal

from accounting.balance_rules import (
    ASSET,
    COST,
    EQUITY,
    EXPENSE,
    LIABILITY,
    REVENUE,
    money,
)
from accounting.models.account import Account
from accounting.models.chart import MainGroup
from accounting.services.balance_service import get_account_balances
from accounting.services.exceptions import AccountingServiceError


def _to_major_number(amount: Decimal) -> float:
    return float(money(amount))


def parse_as_of_date(raw: str | None) -> date_cls:
    """
    Accepts YYYY-MM-DD or DD/MM/YY(YY). Two-digit years are 20xx.
    """
    value = (raw or "").strip()
    if not value:
        raise AccountingServiceError(
            'Date parameter is required (use "date" or "as_of_date")'
        )

    try:
        if "/" in value:
            day, month, year = (int(p) for p in value.split("/"))
            if year < 100:
                year += 2000
            return date_cls(year, month, day)
        return date_cls.fromisoformat(value)
    except ValueError as exc:
        raise AccountingServiceError(
            "Invalid date format (expected YYYY-MM-DD or DD/MM/YY)"
        ) from exc


def _section(main_groups, balances: dict[int, Decimal]) -> tuple[list[dict], Decimal]:
    section = []
    section_total = Decimal("0.00")

    for mg in main_groups:
        subgroups_out = []
        for sg in mg.subgroups.all():
            if not sg.is_active:
                continue
            accounts_out = []
            for acc in sg.accounts.all():
                bal = balances.get(acc.id, Decimal("0.00"))
                section_total += bal
                accounts_out.append(
                    {
                        "id": acc.id,
                        "code": acc.code,
                        "name": acc.name,
                        "balance": _to_major_number(bal),
                    }
                )
            subgroups_out.append(
                {
                    "id": sg.id,
                    "code": sg.code,
                    "name": sg.name,
                    "accounts": accounts_out,
                }
            )
        section.append(
            {
                "id": mg.id,
                "code": mg.code,
                "name": mg.name,
                "subgroups": subgroups_out,
            }
        )

    return section, money(section_total)


def generate_balance_sheet(*, as_of: date_cls) -> dict:
    accounts = list(Account.objects.select_related("subgroup__main_group"))
    balances = get_account_balances(accounts, as_of=as_of)

    main_groups = MainGroup.objects.prefetch_related("subgroups__accounts").order_by(
        "code"
    )
    by_type: dict[str, list] = {}
    for mg in main_groups:
        by_type.setdefault(mg.type, []).append(mg)

    assets, total_assets = _section(by_type.get(ASSET, []), balances)
    liabilities, total_liabilities = _section(by_type.get(LIABILITY, []), balances)
    capital, total_capital = _section(by_type.get(EQUITY, []), balances)

    def _class_total(account_class: str) -> Decimal:
        return money(
            sum(
                (
                    balances[a.id]
                    for a in accounts
                    if a.subgroup.main_group.type == account_class
                    and a.subgroup.is_active
                ),
                Decimal("0.00"),
            )
        )

    revenue = _class_total(REVENUE)
    expense = _class_total(EXPENSE)
    cost = _class_total(COST)
    rev_exp = money(revenue - expense - cost)

    return {
        "as_of_date": as_of.isoformat(),
        "assets": assets,
        "liabilities": liabilities,
        "capital": capital,
        "revenue": _to_major_number(revenue),
        "expense": _to_major_number(expense),
        "cost": _to_major_number(cost),
        "revExp": _to_major_number(rev_exp),
        "totals": {
            "assets": _to_major_number(total_assets),
            "liabilities": _to_major_number(total_liabilities),
            "capital": _to_major_number(total_capital),
            "liabilities_plus_capital_plus_revExp": _to_major_number(
                total_liabilities + total_capital + rev_exp
            ),
            "balanced": money(total_assets)
            == money(total_liabilities + total_capital + rev_exp),
        },
    }
