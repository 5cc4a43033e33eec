# accounting/tests/test_chart_api.py

from datetime import date
from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import TestCase
from rest_framework.test import APIClient

from accounting.models import Account, MainGroup, Subgroup
from accounting.services.chart_service import next_account_code
from accounting.services.voucher_service import create_voucher
from accounting.tests.factories import (
    build_chart,
    make_account,
    make_subgroup,
    make_superuser,
    make_user,
)


class ChartOfAccountsApiTests(TestCase):
    """
    GUARANTEES:
    - Seeded main groups / subgroups are read-only through the API (403)
    - Account codes start with their subgroup code; blank -> next in sequence
    - Protected accounts and accounts with activity are never deleted
    """

    def setUp(self):
        self.c = build_chart()
        self.client = APIClient()
        self.client.force_authenticate(make_superuser())

    def test_fixed_main_group_cannot_be_changed(self):
        url = f"/api/accounting/main-groups/{self.c.assets.id}/"

        res = self.client.put(
            url,
            {"code": "1", "name": "Renamed", "type": "asset", "display_order": 1},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

        res = self.client.delete(url)
        self.assertEqual(res.status_code, 403)
        self.assertTrue(MainGroup.objects.filter(code="1").exists())

    def test_custom_main_group_round_trip(self):
        res = self.client.post(
            "/api/accounting/main-groups/",
            {"code": "10", "name": "Suspense", "type": "Asset", "display_order": 10},
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["type"], "asset")
        self.assertFalse(res.data["is_fixed"])

        res = self.client.delete(f"/api/accounting/main-groups/{res.data['id']}/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"success": True})

    def test_fixed_subgroup_cannot_be_deleted(self):
        res = self.client.delete(f"/api/accounting/subgroups/{self.c.cash_sg.id}/")
        self.assertEqual(res.status_code, 403)

    def test_subgroup_with_accounts_cannot_be_deleted(self):
        petty = make_subgroup(self.c.assets, "105", "Petty Cash")
        make_account(petty, "105001", "Front Desk")

        res = self.client.delete(f"/api/accounting/subgroups/{petty.id}/")
        self.assertEqual(res.status_code, 400)
        self.assertTrue(Subgroup.objects.filter(code="105").exists())

    def test_account_code_must_start_with_subgroup_code(self):
        res = self.client.post(
            "/api/accounting/accounts/",
            {"subgroup": self.c.cash_sg.id, "code": "103999", "name": "Till"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("code", res.data)

    def test_blank_account_code_takes_next_in_sequence(self):
        res = self.client.post(
            "/api/accounting/accounts/",
            {"subgroup": self.c.cash_sg.id, "code": "", "name": "Till", "opening_balance": "25.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["code"], "102002")
        self.assertEqual(res.data["current_balance"], "25.00")

    def test_duplicate_account_code_is_400(self):
        res = self.client.post(
            "/api/accounting/accounts/",
            {"subgroup": self.c.cash_sg.id, "code": "102001", "name": "Again"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("error", res.data)

    def test_current_balance_is_not_writable(self):
        res = self.client.patch(
            f"/api/accounting/accounts/{self.c.bank.id}/",
            {"name": "Main Bank", "current_balance": "999.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)

        self.c.bank.refresh_from_db()
        self.assertEqual(self.c.bank.name, "Main Bank")
        self.assertEqual(str(self.c.bank.current_balance), "0.00")

    def test_protected_account_cannot_be_deleted(self):
        Account.objects.filter(pk=self.c.bank.pk).update(can_delete=False)

        res = self.client.delete(f"/api/accounting/accounts/{self.c.bank.id}/")
        self.assertEqual(res.status_code, 400)
        self.assertTrue(Account.objects.filter(pk=self.c.bank.pk).exists())

    def test_account_with_activity_cannot_be_deleted(self):
        create_voucher(
            voucher_number="JV-900",
            type="journal",
            date=date(2025, 1, 1),
            entries=[
                {"account": self.c.bank, "debit": "10"},
                {"account": self.c.cash, "credit": "10"},
            ],
        )

        res = self.client.delete(f"/api/accounting/accounts/{self.c.bank.id}/")
        self.assertEqual(res.status_code, 400)

    def test_unused_account_can_be_deleted(self):
        res = self.client.delete(f"/api/accounting/accounts/{self.c.cogs.id}/")
        self.assertEqual(res.status_code, 200)
        self.assertFalse(Account.objects.filter(code="901001").exists())

    def test_accounts_filter_by_main_group(self):
        res = self.client.get("/api/accounting/accounts/", {"main_group": self.c.assets.id})
        self.assertEqual(res.status_code, 200)
        self.assertEqual([a["code"] for a in res.data], ["102001", "103001"])

    def test_writes_need_model_permissions(self):
        client = APIClient()
        client.force_authenticate(make_user())
        res = client.post(
            "/api/accounting/accounts/",
            {"subgroup": self.c.cash_sg.id, "name": "Till"},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

    def test_recalculate_balances(self):
        Account.objects.filter(pk=self.c.cash.pk).update(current_balance="0.00")

        res = self.client.post("/api/accounting/recalculate-balances/")
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["success"])

        self.c.cash.refresh_from_db()
        self.assertEqual(str(self.c.cash.current_balance), "1000.00")


class SubgroupCodeRangeTests(TestCase):
    """
    GUARANTEES:
    - A subgroup code may not be a prefix of another subgroup code (or the reverse)
    - Blank account codes are numbered from the subgroup's own accounts only
    """

    def setUp(self):
        self.c = build_chart()
        self.client = APIClient()
        self.client.force_authenticate(make_superuser())

    def test_model_rejects_code_that_prefixes_existing_code(self):
        with self.assertRaises(ValidationError) as ctx:
            make_subgroup(self.c.assets, "10", "Short")
        self.assertIn("code", ctx.exception.message_dict)
        self.assertFalse(Subgroup.objects.filter(code="10").exists())

    def test_model_rejects_code_extending_existing_code(self):
        with self.assertRaises(ValidationError):
            make_subgroup(self.c.assets, "1025", "Long")

    def test_api_rejects_overlapping_code(self):
        res = self.client.post(
            "/api/accounting/subgroups/",
            {"main_group": self.c.assets.id, "code": "10", "name": "Short"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("code", res.data)

    def test_resaving_subgroup_does_not_clash_with_itself(self):
        self.c.cash_sg.name = "Cash in Hand"
        self.c.cash_sg.save()
        self.assertEqual(Subgroup.objects.get(code="102").name, "Cash in Hand")

    def test_next_code_ignores_other_subgroups_sharing_the_prefix(self):
        legacy = make_subgroup(self.c.assets, "199", "Legacy")
        Subgroup.objects.filter(pk=legacy.pk).update(code="10")
        legacy.refresh_from_db()

        self.assertEqual(next_account_code(legacy), "10001")
        self.assertEqual(next_account_code(self.c.bank_sg), "103002")


class SeedChartCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_chart_of_accounts", stdout=StringIO())
        call_command("seed_chart_of_accounts", stdout=StringIO())

        self.assertEqual(MainGroup.objects.count(), 9)
        self.assertEqual(Subgroup.objects.count(), 12)
        self.assertEqual(MainGroup.objects.get(code="9").type, "cost")
        self.assertFalse(Subgroup.objects.get(code="102").can_delete)
