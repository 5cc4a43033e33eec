# accounting/api/financial_urls.py

from django.urls import path

from accounting.api.views.account_groups import AccountGroupsView
from accounting.api.views.balance_sheet import BalanceSheetView
from accounting.api.views.income_statement import IncomeStatementView
from accounting.api.views.ledgers import GeneralJournalView, LedgersView
from accounting.api.views.trial_balance import TrialBalanceView

urlpatterns = [
    path("trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    path("income-statement/", IncomeStatementView.as_view(), name="income-statement"),
    path("general-journal/", GeneralJournalView.as_view(), name="general-journal"),
    path("ledgers/", LedgersView.as_view(), name="ledgers"),
    path("balance-sheet/", BalanceSheetView.as_view(), name="balance-sheet"),
    path("account-groups/", AccountGroupsView.as_view(), name="account-groups"),
]
