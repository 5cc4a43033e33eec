# accounting/management/commands/seed_chart_of_accounts.py

from django.core.management.base import BaseCommand
from django.db import transaction

from accounting.balance_rules import ASSET, COST, EQUITY, EXPENSE, LIABILITY, REVENUE
from accounting.models.chart import MainGroup, Subgroup

# (code, name, type, display_order)
MAIN_GROUPS = [
    ("1", "Current Assets", ASSET, 1),
    ("2", "Long Term Assets", ASSET, 2),
    ("3", "Current Liabilities", LIABILITY, 3),
    ("4", "Long Term Liabilities", LIABILITY, 4),
    ("5", "Capital", EQUITY, 5),
    ("6", "Drawings", EQUITY, 6),
    ("7", "Revenues", REVENUE, 7),
    ("8", "Expenses", EXPENSE, 8),
    ("9", "Cost", COST, 9),
]

# (code, name, main group code)
SUBGROUPS = [
    ("101", "Inventory", "1"),
    ("102", "Cash", "1"),
    ("103", "Bank", "1"),
    ("104", "Sales Customer Receivables", "1"),
    ("301", "Purchase Orders Payables", "3"),
    ("302", "Purchase expenses Payables", "3"),
    ("304", "Other Payables", "4"),
    ("401", "Tax Payables", "4"),
    ("501", "Owner Equity", "5"),
    ("701", "Goods Revenue", "7"),
    ("801", "Purchase Expenses", "8"),
    ("901", "Goods Purchased Cost", "9"),
]


class Command(BaseCommand):
    help = "Seed the fixed main groups and subgroups of the chart of accounts (idempotent)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding chart of accounts...")

        groups_by_code = {}
        created_groups = 0
        updated_groups = 0

        for code, name, account_type, display_order in MAIN_GROUPS:
            group, created = MainGroup.objects.get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "type": account_type,
                    "display_order": display_order,
                },
            )
            groups_by_code[code] = group

            if created:
                created_groups += 1
                continue

            if group.display_order != display_order:
                group.display_order = display_order
                group.save(update_fields=["display_order", "updated_at"])
                updated_groups += 1

        created_subgroups = 0
        updated_subgroups = 0

        for code, name, main_group_code in SUBGROUPS:
            subgroup, created = Subgroup.objects.get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "main_group": groups_by_code[main_group_code],
                    "is_active": True,
                    "can_delete": False,
                },
            )

            if created:
                created_subgroups += 1
                continue

            # Seeded subgroups are never deletable.
            if subgroup.can_delete:
                subgroup.can_delete = False
                subgroup.save(update_fields=["can_delete", "updated_at"])
                updated_subgroups += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"✔ Chart seeded: main groups {created_groups} new / {updated_groups} updated, "
                f"subgroups {created_subgroups} new / {updated_subgroups} updated."
            )
        )
