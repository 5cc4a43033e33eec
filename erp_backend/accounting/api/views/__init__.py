# accounting/api/views/__init__.py

"""
accounting.api.views package

Do NOT import accounting.api.urls from here to avoid circular imports.
"""

from accounting.api.views.account_groups import AccountGroupsView
from accounting.api.views.balance_sheet import BalanceSheetView
from accounting.api.views.chart import AccountViewSet, MainGroupViewSet, SubgroupViewSet
from accounting.api.views.income_statement import IncomeStatementView
from accounting.api.views.journal_entries import JournalEntryViewSet
from accounting.api.views.ledgers import GeneralJournalView, GeneralLedgerView, LedgersView
from accounting.api.views.recalculate_balances import RecalculateBalancesView
from accounting.api.views.trial_balance import TrialBalanceView
from accounting.api.views.vouchers import VoucherViewSet

__all__ = [
    "MainGroupViewSet",
    "SubgroupViewSet",
    "AccountViewSet",
    "JournalEntryViewSet",
    "VoucherViewSet",
    "TrialBalanceView",
    "IncomeStatementView",
    "GeneralJournalView",
    "LedgersView",
    "GeneralLedgerView",
    "BalanceSheetView",
    "AccountGroupsView",
    "RecalculateBalancesView",
]
