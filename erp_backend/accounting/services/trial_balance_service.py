# accounting/services/trial_balance_service.py

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from accounting.balance_rules import (
    ZERO,
    calculate_account_balance,
    get_trial_balance_amounts,
    money,
)
from accounting.models.account import Account
from accounting.services.ledger_source import AccountTotals, account_totals


def _to_major_number(amount: Decimal) -> float:
    return float(money(amount))


def _header_row(node) -> dict:
    return {
        "code": node.code,
        "name": node.name,
        "debit": ZERO,
        "credit": ZERO,
        "isSubgroup": True,
        "level": 0,
    }


class TrialBalanceService:
    """
    Trial Balance computation service.

    Guarantees:
    - Walks the chart in order: MainGroup.display_order, Subgroup.code, Account.code
    - Each account's totals come from the deduplicated ledger source
      (posted vouchers win over journal entries with the same number)
    - Opening balance + balance rule decide the debit/credit column
    - MainGroup and Subgroup header rows precede their first account and
      carry the sum of the account rows beneath them
    - Returns JSON-safe numeric values (no Decimals)
    """

    def __init__(self, account_model=Account):
        self.Account = account_model

    def generate(
        self, *, from_date: Optional[date] = None, to_date: Optional[date] = None
    ) -> list[dict]:
        accounts = list(
            self.Account.objects.select_related("subgroup__main_group").order_by(
                "subgroup__main_group__display_order",
                "subgroup__code",
                "code",
            )
        )

        if not accounts:
            return []

        totals = account_totals(
            from_date=from_date,
            to_date=to_date,
            account_ids=[a.id for a in accounts],
        )

        rows: list[dict] = []
        main_group_rows: dict[int, dict] = {}
        subgroup_rows: dict[int, dict] = {}
        current_main_group_id = None
        current_subgroup_id = None

        for acc in accounts:
            subgroup = acc.subgroup
            main_group = subgroup.main_group
            account_type = main_group.type

            t = totals.get(acc.id, AccountTotals())
            balance = calculate_account_balance(
                acc.opening_balance, t.debit, t.credit, account_type
            )
            amounts = get_trial_balance_amounts(balance, account_type)

            if current_main_group_id != main_group.id:
                current_main_group_id = main_group.id
                if main_group.id not in main_group_rows:
                    header = _header_row(main_group)
                    main_group_rows[main_group.id] = header
                    rows.append(header)

            if current_subgroup_id != subgroup.id:
                current_subgroup_id = subgroup.id
                if subgroup.id not in subgroup_rows:
                    header = _header_row(subgroup)
                    subgroup_rows[subgroup.id] = header
                    rows.append(header)

            rows.append(
                {
                    "code": acc.code,
                    "name": acc.name,
                    "debit": amounts.debit,
                    "credit": amounts.credit,
                    "isSubgroup": False,
                    "level": 1,
                }
            )

            for header in (subgroup_rows[subgroup.id], main_group_rows[main_group.id]):
                header["debit"] += amounts.debit
                header["credit"] += amounts.credit

        for row in rows:
            row["debit"] = _to_major_number(row["debit"])
            row["credit"] = _to_major_number(row["credit"])

        return rows

    @staticmethod
    def totals(rows: list[dict]) -> dict:
        """Grand totals over account rows (headers excluded)."""
        debit = sum((Decimal(str(r["debit"])) for r in rows if not r["isSubgroup"]), ZERO)
        credit = sum((Decimal(str(r["credit"])) for r in rows if not r["isSubgroup"]), ZERO)
        return {
            "debit": _to_major_number(debit),
            "credit": _to_major_number(credit),
            "balanced": money(debit) == money(credit),
        }
