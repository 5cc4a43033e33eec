# accounting/api/filters.py

import django_filters
from django.db.models import Q

from accounting.models.account import Account
from accounting.models.chart import Subgroup
from accounting.models.journal import JournalEntry
from accounting.models.voucher import Voucher
from accounting.services.voucher_service import normalize_voucher_type


class SubgroupFilter(django_filters.FilterSet):
    class Meta:
        model = Subgroup
        fields = ("main_group", "is_active")


class AccountFilter(django_filters.FilterSet):
    main_group = django_filters.NumberFilter(field_name="subgroup__main_group_id")

    class Meta:
        model = Account
        fields = ("subgroup", "status", "main_group")


class JournalEntryFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    from_date = django_filters.DateFilter(field_name="entry_date", lookup_expr="gte")
    to_date = django_filters.DateFilter(field_name="entry_date", lookup_expr="lte")

    class Meta:
        model = JournalEntry
        fields = ("status", "search", "from_date", "to_date")

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(entry_no__icontains=value)
            | Q(reference__icontains=value)
            | Q(description__icontains=value)
        )


class VoucherFilter(django_filters.FilterSet):
    type = django_filters.CharFilter(method="filter_type")
    status = django_filters.CharFilter(method="filter_status")
    search = django_filters.CharFilter(method="filter_search")
    from_date = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    to_date = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = Voucher
        fields = ("type", "status", "search", "from_date", "to_date")

    def filter_type(self, queryset, name, value):
        voucher_type = normalize_voucher_type(value)
        if voucher_type is None:
            return queryset
        return queryset.filter(type=voucher_type)

    def filter_status(self, queryset, name, value):
        value = (value or "").strip().lower()
        if not value or value == "all":
            return queryset
        return queryset.filter(status=value)

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(voucher_number__icontains=value)
            | Q(narration__icontains=value)
        )
