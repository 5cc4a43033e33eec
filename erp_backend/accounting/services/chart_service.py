# accounting/services/chart_service.py

"""
CHART OF ACCOUNTS SERVICE

Owns the write side of MainGroup / Subgroup / Account:
- sequential account code allocation (<subgroup code><NNN>)
- account creation (current_balance starts at the opening balance)
- protection of fixed chart nodes and non-deletable accounts
- resolution of the Owner Capital account used by opening balances
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction

from accounting.balance_rules import money
from accounting.models.account import Account
from accounting.models.chart import MainGroup, Subgroup
from accounting.services.exceptions import AccountingServiceError, AccountResolutionError
from accounting.services.numbering import next_sequence_value

logger = logging.getLogger(__name__)


class FixedChartNodeError(AccountingServiceError):
    """Raised when a seeded (fixed) main group or subgroup is changed."""


def next_account_code(subgroup: Subgroup) -> str:
    return next_sequence_value(
        model=Account,
        field="code",
        prefix=subgroup.code,
        width=3,
        filters={"subgroup": subgroup},
    )


def get_subgroup_by_code(code: str) -> Subgroup:
    try:
        return Subgroup.objects.select_related("main_group").get(code=code)
    except Subgroup.DoesNotExist as exc:
        raise AccountResolutionError(
            f"Subgroup ({code}) not found. Please create accounting structure first."
        ) from exc


@transaction.atomic
def create_account(
    *,
    subgroup: Subgroup,
    name: str,
    code: str | None = None,
    description: str = "",
    opening_balance=Decimal("0.00"),
    status: str = Account.STATUS_ACTIVE,
    can_delete: bool = True,
) -> Account:
    code = (code or "").strip() or next_account_code(subgroup)
    opening = money(opening_balance)

    if Account.objects.filter(code=code).exists():
        raise AccountingServiceError(
            "Account code already exists. Please use a unique code."
        )

    account = Account.objects.create(
        subgroup=subgroup,
        code=code,
        name=name,
        description=description or "",
        opening_balance=opening,
        current_balance=opening,
        status=status or Account.STATUS_ACTIVE,
        can_delete=can_delete,
    )

    logger.info(
        "Account created",
        extra={"account_code": account.code, "subgroup_code": subgroup.code},
    )
    return account


def get_or_create_owner_capital_account() -> Account:
    code = settings.LEDGER_OWNER_CAPITAL_ACCOUNT_CODE

    account = Account.objects.filter(code=code).first()
    if account is not None:
        return account

    capital = get_subgroup_by_code(settings.LEDGER_CAPITAL_SUBGROUP_CODE)
    return create_account(
        subgroup=capital,
        code=code,
        name="OWNER CAPITAL",
        description="Owner Capital account for partner opening balances",
        can_delete=False,
    )


def assert_main_group_editable(main_group: MainGroup) -> None:
    if main_group.is_fixed:
        raise FixedChartNodeError("This main group is fixed and cannot be modified")


def assert_subgroup_editable(subgroup: Subgroup) -> None:
    if subgroup.is_fixed:
        raise FixedChartNodeError("This subgroup is fixed and cannot be edited")


def assert_account_deletable(account: Account) -> None:
    if not account.can_delete:
        raise AccountingServiceError("This account is protected and cannot be deleted")
    if account.journal_lines.exists() or account.voucher_entries.exists():
        raise AccountingServiceError(
            "Account has ledger activity and cannot be deleted"
        )
