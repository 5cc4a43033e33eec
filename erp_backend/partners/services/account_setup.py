# partners/services/account_setup.py

"""
======================================================
PATH: partners/services/account_setup.py
======================================================
PARTNER LEDGER ACCOUNT SETUP

Runs after a customer / supplier row is committed:

1) create the partner's ledger account
   - customer: receivables subgroup (LEDGER_RECEIVABLES_SUBGROUP_CODE)
   - supplier: payables subgroup   (LEDGER_PAYABLES_SUBGROUP_CODE)
   - code <subgroup><NNN>, can_delete=False
2) opening balance > 0: post a JOURNAL voucher against Owner Capital
   - customer: Dr customer      / Cr owner capital
   - supplier: Dr owner capital / Cr supplier
   (posting refreshes both balances)

The chain runs inside a savepoint: any failure rolls back every step of
the chain (account, link, voucher) while the partner row survives.
The outcome is returned, never raised:
    {"status": "ok" | "skipped" | "failed", ...}
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction

from accounting.balance_rules import ZERO, money
from accounting.models.voucher import Voucher
from accounting.services.chart_service import (
    create_account,
    get_or_create_owner_capital_account,
    get_subgroup_by_code,
)
from accounting.services.voucher_service import create_system_voucher
from partners.models import Customer, Supplier

logger = logging.getLogger(__name__)

SYSTEM_USER = "System"

STATUS_OK = "ok"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


def _opening_entries(*, debit_account, credit_account, amount, description):
    return [
        {
            "account": debit_account,
            "description": description,
            "debit": amount,
            "credit": ZERO,
        },
        {
            "account": credit_account,
            "description": description,
            "debit": ZERO,
            "credit": amount,
        },
    ]


def _run_setup(partner, *, kind: str, subgroup_code: str, account_name: str,
               description: str, narration: str, capital_is_debit: bool) -> dict:
    if not settings.LEDGER_AUTO_POSTING_ENABLED:
        return {"status": STATUS_SKIPPED, "reason": "auto posting disabled"}

    if partner.account_id:
        return {"status": STATUS_SKIPPED, "reason": "account already linked"}

    opening = money(partner.opening_balance)

    try:
        with transaction.atomic():
            subgroup = get_subgroup_by_code(subgroup_code)
            account = create_account(
                subgroup=subgroup,
                name=account_name,
                description=description,
                can_delete=False,
            )

            partner.account = account
            partner.save(update_fields=["account", "updated_at"])

            voucher = None
            if opening > ZERO:
                capital = get_or_create_owner_capital_account()
                line_description = f"{narration} - {opening}"
                if capital_is_debit:
                    entries = _opening_entries(
                        debit_account=capital,
                        credit_account=account,
                        amount=opening,
                        description=line_description,
                    )
                else:
                    entries = _opening_entries(
                        debit_account=account,
                        credit_account=capital,
                        amount=opening,
                        description=line_description,
                    )

                voucher = create_system_voucher(
                    type=Voucher.TYPE_JOURNAL,
                    entries=entries,
                    narration=narration,
                    date=partner.date,
                    created_by=SYSTEM_USER,
                )
    except Exception as exc:
        # The savepoint rolled the chain back; keep the instance consistent.
        partner.account = None
        logger.exception(
            "Partner account setup failed",
            extra={"partner_kind": kind, "partner_id": partner.pk},
        )
        return {"status": STATUS_FAILED, "error": str(exc)}

    logger.info(
        "Partner account setup complete",
        extra={
            "partner_kind": kind,
            "partner_id": partner.pk,
            "account_code": account.code,
            "voucher_number": voucher.voucher_number if voucher else None,
        },
    )
    return {
        "status": STATUS_OK,
        "account": account.code,
        "voucher": voucher.voucher_number if voucher else None,
    }


def setup_customer_account(customer: Customer) -> dict:
    return _run_setup(
        customer,
        kind="customer",
        subgroup_code=settings.LEDGER_RECEIVABLES_SUBGROUP_CODE,
        account_name=customer.name,
        description=f"Customer Account: {customer.name}",
        narration=f"Customer Opening Balance: {customer.name} (CUST-{customer.pk})",
        capital_is_debit=False,
    )


def setup_supplier_account(supplier: Supplier) -> dict:
    return _run_setup(
        supplier,
        kind="supplier",
        subgroup_code=settings.LEDGER_PAYABLES_SUBGROUP_CODE,
        account_name=supplier.display_name,
        description=f"Supplier Account: {supplier.company_name}",
        narration=f"Supplier Opening Balance: {supplier.display_name} ({supplier.code})",
        capital_is_debit=True,
    )
