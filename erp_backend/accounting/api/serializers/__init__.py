# accounting/api/serializers/__init__.py

from accounting.api.serializers.chart import (
    AccountCreateSerializer,
    AccountSerializer,
    AccountUpdateSerializer,
    MainGroupSerializer,
    SubgroupSerializer,
)
from accounting.api.serializers.journal_entries import (
    JournalEntryCreateSerializer,
    JournalEntrySerializer,
)
from accounting.api.serializers.vouchers import (
    VoucherSerializer,
    VoucherWriteSerializer,
)

__all__ = [
    "MainGroupSerializer",
    "SubgroupSerializer",
    "AccountSerializer",
    "AccountCreateSerializer",
    "AccountUpdateSerializer",
    "JournalEntrySerializer",
    "JournalEntryCreateSerializer",
    "VoucherSerializer",
    "VoucherWriteSerializer",
]
