# partners/api/filters.py

import django_filters
from django.db.models import Q

from partners.models import Customer, Supplier


class _StatusFilterMixin:
    def filter_status(self, queryset, name, value):
        value = (value or "").strip().lower()
        if not value or value == "all":
            return queryset
        return queryset.filter(status=value)


class CustomerFilter(_StatusFilterMixin, django_filters.FilterSet):
    status = django_filters.CharFilter(method="filter_status")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Customer
        fields = ["status"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value)
            | Q(email__icontains=value)
            | Q(cnic__icontains=value)
            | Q(contact_no__icontains=value)
        )


class SupplierFilter(_StatusFilterMixin, django_filters.FilterSet):
    status = django_filters.CharFilter(method="filter_status")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Supplier
        fields = ["status"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(company_name__icontains=value)
            | Q(name__icontains=value)
            | Q(email__icontains=value)
            | Q(code__icontains=value)
            | Q(phone__icontains=value)
        )
