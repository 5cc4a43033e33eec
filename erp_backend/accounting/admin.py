# accounting/admin.py

from django.contrib import admin

from accounting.models import (
    Account,
    JournalEntry,
    JournalLine,
    MainGroup,
    Subgroup,
    Voucher,
    VoucherEntry,
)

# ============================================================
# CHART OF ACCOUNTS
# ============================================================


@admin.register(MainGroup)
class MainGroupAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "type", "display_order", "updated_at")
    list_filter = ("type",)
    search_fields = ("code", "name")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("display_order", "code")


@admin.register(Subgroup)
class SubgroupAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "main_group", "is_active", "can_delete")
    list_filter = ("main_group", "is_active")
    search_fields = ("code", "name")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("code",)


# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "subgroup",
        "opening_balance",
        "current_balance",
        "status",
    )
    list_filter = ("status", "subgroup__main_group", "subgroup")
    search_fields = ("code", "name")
    ordering = ("code",)
    readonly_fields = ("current_balance", "created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("subgroup", "code", "name", "description"),
            },
        ),
        (
            "Balances",
            {
                "fields": ("opening_balance", "current_balance"),
            },
        ),
        (
            "Status",
            {
                "fields": ("status", "can_delete"),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )


# ============================================================
# LEDGER DOCUMENTS (READ-ONLY)
# Postings must go through the services so balances stay in sync.
# ============================================================


class ReadOnlyAdminMixin:
    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class JournalLineInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = JournalLine
    extra = 0
    fields = ("line_order", "account", "description", "debit", "credit")
    readonly_fields = fields


@admin.register(JournalEntry)
class JournalEntryAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "entry_no",
        "entry_date",
        "status",
        "total_debit",
        "total_credit",
        "posted_at",
    )
    list_filter = ("status", "entry_date")
    search_fields = ("entry_no", "reference", "description")
    ordering = ("-entry_date", "-created_at")
    inlines = [JournalLineInline]


class VoucherEntryInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = VoucherEntry
    extra = 0
    fields = ("sort_order", "account", "account_name", "description", "debit", "credit")
    readonly_fields = fields


@admin.register(Voucher)
class VoucherAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "voucher_number",
        "type",
        "date",
        "status",
        "total_debit",
        "total_credit",
    )
    list_filter = ("type", "status", "date")
    search_fields = ("voucher_number", "narration", "cheque_number")
    ordering = ("-date", "-created_at")
    inlines = [VoucherEntryInline]
