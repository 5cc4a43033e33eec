# partners/services/partner_service.py

"""
PARTNER SERVICE

create_customer / create_supplier persist the partner row first, then run
the ledger account setup chain. The partner is kept even when the chain
fails; the setup outcome travels back to the caller.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from accounting.services.numbering import next_sequence_value
from partners.models import Customer, Supplier
from partners.services.account_setup import (
    setup_customer_account,
    setup_supplier_account,
)
from partners.services.exceptions import PartnerError

logger = logging.getLogger(__name__)

SUPPLIER_CODE_PREFIX = "SUP-"


def next_supplier_code() -> str:
    return next_sequence_value(
        model=Supplier, field="code", prefix=SUPPLIER_CODE_PREFIX, width=3
    )


@transaction.atomic
def create_customer(**fields) -> tuple[Customer, dict]:
    customer = Customer.objects.create(**fields)
    logger.info("Customer created", extra={"customer_id": customer.pk})

    return customer, setup_customer_account(customer)


@transaction.atomic
def create_supplier(*, code: str | None = None, **fields) -> tuple[Supplier, dict]:
    code = (code or "").strip() or next_supplier_code()

    if Supplier.objects.filter(code=code).exists():
        raise PartnerError("Supplier code already exists")

    try:
        supplier = Supplier.objects.create(code=code, **fields)
    except IntegrityError as exc:
        raise PartnerError("Supplier code already exists") from exc

    logger.info(
        "Supplier created", extra={"supplier_id": supplier.pk, "supplier_code": code}
    )

    return supplier, setup_supplier_account(supplier)
