# accounting/balance_rules.py

"""
PATH: accounting/balance_rules.py

ACCOUNT BALANCE RULE (FRAMEWORK-AGNOSTIC)

Single authoritative implementation of the double-entry balance rule.
Used by:
- posting (balance projection refresh after a document is posted)
- trial balance, ledgers, general ledger and balance sheet reports

Rules:
- Account classes form a CLOSED set: asset, liability, equity, revenue,
  expense, cost. Comparison is case-insensitive. Anything else raises.
- Debit-normal (asset, expense, cost):
    balance = opening + debit - credit
- Credit-normal (liability, equity, revenue):
    balance = opening + credit - debit
- Trial balance columns are mutually exclusive:
    a positive balance sits on the family's natural side,
    a negative balance sits on the opposite side (absolute value).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from accounting.services.exceptions import (
    UnbalancedDocumentError,
    UnknownAccountTypeError,
)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

ASSET = "asset"
LIABILITY = "liability"
EQUITY = "equity"
REVENUE = "revenue"
EXPENSE = "expense"
COST = "cost"

ACCOUNT_CLASSES = (ASSET, LIABILITY, EQUITY, REVENUE, EXPENSE, COST)

ACCOUNT_CLASS_CHOICES = [
    (ASSET, "Asset"),
    (LIABILITY, "Liability"),
    (EQUITY, "Equity"),
    (REVENUE, "Revenue"),
    (EXPENSE, "Expense"),
    (COST, "Cost"),
]

DEBIT_NORMAL_CLASSES = frozenset({ASSET, EXPENSE, COST})
CREDIT_NORMAL_CLASSES = frozenset({LIABILITY, EQUITY, REVENUE})


def money(value) -> Decimal:
    """Coerce a number/str/None into a 2dp Decimal."""
    if value is None or value == "":
        return ZERO
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid money value: {value!r}") from exc
    return d.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def normalize_account_class(account_type) -> str:
    normalized = str(account_type or "").strip().lower()
    if normalized not in ACCOUNT_CLASSES:
        raise UnknownAccountTypeError(
            f"Unknown account type {account_type!r}. "
            f"Expected one of: {', '.join(ACCOUNT_CLASSES)}"
        )
    return normalized


def is_debit_normal(account_type) -> bool:
    return normalize_account_class(account_type) in DEBIT_NORMAL_CLASSES


def calculate_balance_change(debit, credit, account_type) -> Decimal:
    """
    Signed effect of one posting line on the account's balance.
    """
    d = money(debit)
    c = money(credit)
    if is_debit_normal(account_type):
        return d - c
    return c - d


def calculate_account_balance(
    opening_balance, total_debit, total_credit, account_type
) -> Decimal:
    return money(opening_balance) + calculate_balance_change(
        total_debit, total_credit, account_type
    )


@dataclass(frozen=True)
class TrialBalanceAmounts:
    debit: Decimal
    credit: Decimal


def get_trial_balance_amounts(balance, account_type) -> TrialBalanceAmounts:
    b = money(balance)
    natural = abs(b) if b > 0 else ZERO
    opposite = abs(b) if b < 0 else ZERO

    if is_debit_normal(account_type):
        return TrialBalanceAmounts(debit=natural, credit=opposite)
    return TrialBalanceAmounts(debit=opposite, credit=natural)


def document_totals(lines: Iterable) -> tuple[Decimal, Decimal]:
    """
    Sum debit/credit over document lines.

    Lines may be dicts ({"debit": .., "credit": ..}) or objects with
    debit/credit attributes.
    """
    total_debit = ZERO
    total_credit = ZERO
    for line in lines:
        if isinstance(line, dict):
            debit, credit = line.get("debit"), line.get("credit")
        else:
            debit, credit = getattr(line, "debit", None), getattr(line, "credit", None)
        total_debit += money(debit)
        total_credit += money(credit)
    return money(total_debit), money(total_credit)


def assert_balanced(lines: Iterable) -> tuple[Decimal, Decimal]:
    """
    Hard precondition for every ledger document: sum(debit) == sum(credit).
    Returns the (debit, credit) totals so callers can persist them.
    """
    total_debit, total_credit = document_totals(lines)
    if total_debit != total_credit:
        raise UnbalancedDocumentError(
            f"Total debit must equal total credit: debit={total_debit} credit={total_credit}"
        )
    return total_debit, total_credit
