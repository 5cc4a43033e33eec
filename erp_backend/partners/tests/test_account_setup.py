# partners/tests/test_account_setup.py

from decimal import Decimal
from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from accounting.models import Account, MainGroup, Subgroup, Voucher
from accounting.tests.factories import make_superuser
from partners.models import Customer, Supplier
from partners.services.exceptions import PartnerError
from partners.services.partner_service import create_customer, create_supplier


def seed_chart():
    call_command("seed_chart_of_accounts", stdout=StringIO())


@override_settings(LEDGER_AUTO_POSTING_ENABLED=True)
class PartnerAccountSetupTests(TestCase):
    """
    GUARANTEES:
    - Every new partner gets a protected ledger account in its subgroup
    - A positive opening balance is posted against Owner Capital
    - A failing chain leaves the partner row and nothing else
    """

    def test_customer_with_opening_balance(self):
        seed_chart()

        customer, setup = create_customer(name="Ali Traders", opening_balance=Decimal("500.00"))

        self.assertEqual(setup["status"], "ok")
        self.assertEqual(setup["account"], "103001")
        self.assertEqual(setup["voucher"], "JV-0001")

        customer.refresh_from_db()
        account = customer.account
        self.assertEqual(account.code, "103001")
        self.assertEqual(account.name, "Ali Traders")
        self.assertFalse(account.can_delete)
        self.assertEqual(account.current_balance, Decimal("500.00"))

        capital = Account.objects.get(code="501003")
        self.assertEqual(capital.current_balance, Decimal("500.00"))
        self.assertFalse(capital.can_delete)

        voucher = Voucher.objects.get(voucher_number="JV-0001")
        self.assertEqual(voucher.status, Voucher.STATUS_POSTED)
        self.assertEqual(voucher.type, Voucher.TYPE_JOURNAL)
        self.assertEqual(voucher.created_by, "System")
        self.assertEqual(
            voucher.narration,
            f"Customer Opening Balance: Ali Traders (CUST-{customer.pk})",
        )

    def test_customer_without_opening_balance_gets_no_voucher(self):
        seed_chart()

        customer, setup = create_customer(name="Walk-in")

        self.assertEqual(setup["status"], "ok")
        self.assertIsNone(setup["voucher"])
        self.assertEqual(Voucher.objects.count(), 0)
        self.assertFalse(Account.objects.filter(code="501003").exists())

    def test_supplier_with_opening_balance(self):
        seed_chart()

        supplier, setup = create_supplier(
            company_name="Medline Ltd", name="Sara", opening_balance=Decimal("300.00")
        )

        self.assertEqual(setup["status"], "ok")
        supplier.refresh_from_db()
        self.assertEqual(supplier.code, "SUP-001")
        self.assertEqual(supplier.account.code, "301001")
        self.assertEqual(supplier.account.current_balance, Decimal("300.00"))

        # Owner capital is debited, which lowers an equity balance.
        capital = Account.objects.get(code="501003")
        self.assertEqual(capital.current_balance, Decimal("-300.00"))

        voucher = Voucher.objects.get(voucher_number=setup["voucher"])
        debit_line = voucher.entries.get(debit__gt=0)
        self.assertEqual(debit_line.account_id, capital.id)

    def test_supplier_codes_are_sequential(self):
        seed_chart()

        first, _ = create_supplier(company_name="Alpha")
        second, _ = create_supplier(company_name="Beta")

        self.assertEqual(first.code, "SUP-001")
        self.assertEqual(second.code, "SUP-002")

    def test_duplicate_supplier_code_is_rejected(self):
        seed_chart()
        create_supplier(company_name="Alpha", code="SUP-010")

        with self.assertRaises(PartnerError):
            create_supplier(company_name="Beta", code="SUP-010")

    def test_failure_without_chart_keeps_partner(self):
        customer, setup = create_customer(name="Orphan", opening_balance=Decimal("50.00"))

        self.assertEqual(setup["status"], "failed")
        self.assertIn("103", setup["error"])

        customer.refresh_from_db()
        self.assertIsNone(customer.account_id)
        self.assertEqual(Account.objects.count(), 0)
        self.assertEqual(Voucher.objects.count(), 0)

    def test_failure_after_account_creation_rolls_back_the_account(self):
        assets = MainGroup.objects.create(code="1", name="Current Assets", type="asset")
        Subgroup.objects.create(main_group=assets, code="103", name="Bank")

        customer, setup = create_customer(name="Half Way", opening_balance=Decimal("75.00"))

        self.assertEqual(setup["status"], "failed")
        self.assertTrue(Customer.objects.filter(pk=customer.pk).exists())
        customer.refresh_from_db()
        self.assertIsNone(customer.account_id)
        self.assertEqual(Account.objects.count(), 0)

    @override_settings(LEDGER_AUTO_POSTING_ENABLED=False)
    def test_disabled_auto_posting_skips_setup(self):
        seed_chart()

        customer, setup = create_customer(name="Quiet", opening_balance=Decimal("10.00"))

        self.assertEqual(setup["status"], "skipped")
        self.assertIsNone(customer.account_id)
        self.assertEqual(Account.objects.count(), 0)

    def test_negative_opening_balance_is_rejected(self):
        seed_chart()

        with self.assertRaises(ValidationError):
            create_customer(name="Debtor", opening_balance=Decimal("-1.00"))
        self.assertEqual(Customer.objects.count(), 0)


@override_settings(LEDGER_AUTO_POSTING_ENABLED=True)
class PartnerApiTests(TestCase):
    def setUp(self):
        seed_chart()
        self.client = APIClient()
        self.client.force_authenticate(make_superuser())

    def test_create_customer_reports_setup(self):
        res = self.client.post(
            "/api/customers/",
            {"name": "Ali Traders", "opening_balance": "500.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["account_setup"]["status"], "ok")
        self.assertEqual(res.data["account_detail"]["code"], "103001")
        self.assertEqual(res.data["account_detail"]["current_balance"], 500.0)

    def test_negative_opening_balance_is_400(self):
        res = self.client.post(
            "/api/customers/",
            {"name": "Debtor", "opening_balance": "-5.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_opening_balance_is_write_once(self):
        res = self.client.post(
            "/api/customers/",
            {"name": "Ali Traders", "opening_balance": "500.00"},
            format="json",
        )
        customer_id = res.data["id"]

        res = self.client.patch(
            f"/api/customers/{customer_id}/",
            {"opening_balance": "900.00", "contact_no": "0300"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)

        customer = Customer.objects.get(pk=customer_id)
        self.assertEqual(customer.opening_balance, Decimal("500.00"))
        self.assertEqual(customer.contact_no, "0300")

    def test_supplier_list_search_and_status(self):
        self.client.post("/api/suppliers/", {"company_name": "Medline Ltd"}, format="json")
        self.client.post(
            "/api/suppliers/",
            {"company_name": "Pharmaco", "status": "inactive"},
            format="json",
        )

        res = self.client.get("/api/suppliers/", {"search": "med"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["pagination"]["total"], 1)
        self.assertEqual(res.data["data"][0]["code"], "SUP-001")

        res = self.client.get("/api/suppliers/", {"status": "inactive"})
        self.assertEqual([s["company_name"] for s in res.data["data"]], ["Pharmaco"])

    def test_delete_customer_keeps_account(self):
        res = self.client.post("/api/customers/", {"name": "Gone Soon"}, format="json")
        customer_id = res.data["id"]

        res = self.client.delete(f"/api/customers/{customer_id}/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["message"], "Customer deleted successfully")
        self.assertFalse(Customer.objects.filter(pk=customer_id).exists())
        self.assertTrue(Account.objects.filter(code="103001").exists())
