# accounting/services/balance_service.py

"""
BALANCE SERVICE (AUTHORITATIVE)

RULES:
- Balances are derived from the unified ledger source + the balance rule
- Account.current_balance is a PROJECTION: it is recomputed from the
  ledger after postings (refresh_account_balances), never incremented
- A single function answers "balance as of date" for every caller
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from django.db import transaction

from accounting.balance_rules import calculate_account_balance
from accounting.models.account import Account
from accounting.services.exceptions import AccountResolutionError
from accounting.services.ledger_source import AccountTotals, account_totals

logger = logging.getLogger(__name__)


def get_account_balance(account: Account, *, as_of: Optional[date] = None) -> Decimal:
    """
    Balance rule:
    - Assets, Expenses & Cost → opening + debits - credits
    - Liabilities, Equity & Revenue → opening + credits - debits
    """
    if account is None:
        raise AccountResolutionError("Account is required")

    totals = account_totals(to_date=as_of, account_ids=[account.id]).get(
        account.id, AccountTotals()
    )

    return calculate_account_balance(
        account.opening_balance,
        totals.debit,
        totals.credit,
        account.subgroup.main_group.type,
    )


def get_account_balances(
    accounts: Iterable[Account], *, as_of: Optional[date] = None
) -> dict[int, Decimal]:
    """
    Bulk variant of get_account_balance.

    Accounts must be loaded with subgroup__main_group (select_related).
    """
    accounts = list(accounts)
    if not accounts:
        return {}

    totals = account_totals(to_date=as_of, account_ids=[a.id for a in accounts])

    balances = {}
    for acc in accounts:
        t = totals.get(acc.id, AccountTotals())
        balances[acc.id] = calculate_account_balance(
            acc.opening_balance, t.debit, t.credit, acc.subgroup.main_group.type
        )
    return balances


@transaction.atomic
def refresh_account_balances(account_ids: Iterable[int]) -> dict[int, Decimal]:
    """
    Recompute current_balance for the given accounts from the full posted
    ledger. Called after any document is posted or removed.
    """
    ids = sorted({int(i) for i in account_ids if i is not None})
    if not ids:
        return {}

    accounts = list(
        Account.objects.select_for_update()
        .select_related("subgroup__main_group")
        .filter(id__in=ids)
    )

    balances = get_account_balances(accounts)

    for acc in accounts:
        new_balance = balances[acc.id]
        if acc.current_balance != new_balance:
            Account.objects.filter(id=acc.id).update(current_balance=new_balance)
            acc.current_balance = new_balance

    logger.info("Refreshed account balances", extra={"account_ids": ids})
    return balances


def recalculate_all_balances() -> int:
    ids = list(Account.objects.values_list("id", flat=True))
    refresh_account_balances(ids)
    return len(ids)
