# accounting/management/commands/recalculate_balances.py

from django.core.management.base import BaseCommand

from accounting.services.balance_service import recalculate_all_balances


class Command(BaseCommand):
    help = "Rebuild every Account.current_balance from the posted ledger"

    def handle(self, *args, **options):
        self.stdout.write("Recalculating account balances...")

        count = recalculate_all_balances()

        self.stdout.write(
            self.style.SUCCESS(f"✔ Recalculated balances for {count} accounts.")
        )
