# partners/apps.py

"""
PARTNERS APP CONFIG

Customers and suppliers. Each partner gets its own ledger account
(receivables / payables) when it is created.
"""

from django.apps import AppConfig


class PartnersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "partners"
    verbose_name = "Customers & Suppliers"
