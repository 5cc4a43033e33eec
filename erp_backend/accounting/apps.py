# accounting/apps.py

"""
ACCOUNTING APP CONFIG

General ledger module:
- Chart of accounts (main groups, subgroups, accounts)
- Ledger documents (journal entries, vouchers)
- Financial reports (trial balance, income statement, balance sheet, ledgers)
"""

from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounting"
    verbose_name = "Accounting"
