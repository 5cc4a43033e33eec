# partners/admin.py

from django.contrib import admin

from partners.models import Customer, Supplier


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_no", "email", "opening_balance", "status", "account")
    list_filter = ("status",)
    search_fields = ("name", "email", "cnic", "contact_no")
    readonly_fields = ("account", "created_at", "updated_at")
    ordering = ("-created_at",)


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("code", "company_name", "phone", "opening_balance", "status", "account")
    list_filter = ("status",)
    search_fields = ("code", "company_name", "name", "email", "phone")
    readonly_fields = ("account", "created_at", "updated_at")
    ordering = ("-created_at",)
