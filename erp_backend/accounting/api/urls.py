# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

# Import view modules directly to avoid circular imports through views/__init__.py.
from accounting.api.views.chart import AccountViewSet, MainGroupViewSet, SubgroupViewSet
from accounting.api.views.journal_entries import JournalEntryViewSet
from accounting.api.views.ledgers import GeneralLedgerView
from accounting.api.views.recalculate_balances import RecalculateBalancesView

router = DefaultRouter()
router.register("main-groups", MainGroupViewSet, basename="main-group")
router.register("subgroups", SubgroupViewSet, basename="subgroup")
router.register("accounts", AccountViewSet, basename="account")
router.register("journal-entries", JournalEntryViewSet, basename="journal-entry")

urlpatterns = [
    # Router endpoints
    path("", include(router.urls)),
    # Reports
    path("general-ledger/", GeneralLedgerView.as_view(), name="general-ledger"),
    # Maintenance
    path(
        "recalculate-balances/",
        RecalculateBalancesView.as_view(),
        name="recalculate-balances",
    ),
]
