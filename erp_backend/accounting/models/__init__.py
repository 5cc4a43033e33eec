# accounting/models/__init__.py

"""
ACCOUNTING MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
- Do NOT import services from models anywhere (models must stay pure).
"""

from accounting.models.account import Account
from accounting.models.chart import MainGroup, Subgroup
from accounting.models.journal import JournalEntry, JournalLine
from accounting.models.voucher import Voucher, VoucherEntry

__all__ = [
    "MainGroup",
    "Subgroup",
    "Account",
    "JournalEntry",
    "JournalLine",
    "Voucher",
    "VoucherEntry",
]
