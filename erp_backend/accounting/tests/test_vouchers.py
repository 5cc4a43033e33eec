# accounting/tests/test_vouchers.py

from datetime import date
from decimal import Decimal

from django.test import TestCase

from accounting.models.journal import JournalEntry
from accounting.models.voucher import Voucher
from accounting.services.exceptions import (
    DocumentNumberError,
    DocumentStateError,
    UnbalancedDocumentError,
    VoucherError,
)
from accounting.services.journal_entry_service import (
    create_journal_entry,
    post_journal_entry,
)
from accounting.services.voucher_service import (
    create_system_voucher,
    create_voucher,
    delete_voucher,
    normalize_voucher_type,
    post_voucher,
    update_voucher,
)
from accounting.tests.factories import build_chart

TODAY = date(2025, 2, 1)


class VoucherServiceTests(TestCase):
    """
    GUARANTEES:
    - Vouchers must balance before any row is written
    - Only drafts are editable; posting happens once
    - Deleting a voucher removes its journal twin and restores balances
    """

    def setUp(self):
        self.c = build_chart()

    def _payment(self, number="PV-001", status=Voucher.STATUS_DRAFT, amount="250"):
        return create_voucher(
            voucher_number=number,
            type="payment",
            date=TODAY,
            narration="Rent for February",
            entries=[
                {"account": self.c.rent, "debit": amount},
                {"account": self.c.cash, "credit": amount},
            ],
            status=status,
        )

    def test_create_draft_persists_totals_and_labels(self):
        voucher = self._payment()

        self.assertEqual(voucher.status, Voucher.STATUS_DRAFT)
        self.assertEqual(voucher.total_debit, Decimal("250.00"))
        entries = list(voucher.posting_lines())
        self.assertEqual(entries[0].account_name, "801001-Rent")
        self.assertEqual([e.sort_order for e in entries], [0, 1])

    def test_unbalanced_voucher_is_rejected(self):
        with self.assertRaises(UnbalancedDocumentError):
            create_voucher(
                voucher_number="PV-BAD",
                type="payment",
                date=TODAY,
                entries=[
                    {"account": self.c.rent, "debit": "100"},
                    {"account": self.c.cash, "credit": "99.99"},
                ],
            )
        self.assertFalse(Voucher.objects.exists())

    def test_missing_entries_rejected(self):
        with self.assertRaises(VoucherError):
            create_voucher(voucher_number="PV-0", type="payment", date=TODAY, entries=[])

    def test_unknown_type_rejected(self):
        with self.assertRaises(VoucherError):
            create_voucher(
                voucher_number="XV-1",
                type="transfer",
                date=TODAY,
                entries=[
                    {"account": self.c.cash, "debit": "1"},
                    {"account": self.c.bank, "credit": "1"},
                ],
            )
        self.assertFalse(Voucher.objects.exists())

    def test_duplicate_number_rejected(self):
        self._payment()
        with self.assertRaises(DocumentNumberError):
            self._payment()

    def test_posting_refreshes_balances(self):
        post_voucher(self._payment(), approved_by="bob")

        self.c.cash.refresh_from_db()
        self.c.rent.refresh_from_db()
        self.assertEqual(self.c.cash.current_balance, Decimal("750.00"))
        self.assertEqual(self.c.rent.current_balance, Decimal("250.00"))

    def test_create_posted_in_one_step(self):
        voucher = self._payment(status=Voucher.STATUS_POSTED)
        self.assertTrue(voucher.is_posted)
        self.assertIsNotNone(voucher.approved_at)

    def test_double_post_raises(self):
        voucher = self._payment(status=Voucher.STATUS_POSTED)
        with self.assertRaises(DocumentStateError):
            post_voucher(voucher)

    def test_update_draft_replaces_entries(self):
        voucher = update_voucher(
            self._payment(),
            narration="Rent (corrected)",
            entries=[
                {"account": self.c.rent, "debit": "300"},
                {"account": self.c.bank, "credit": "300"},
            ],
        )
        self.assertEqual(voucher.narration, "Rent (corrected)")
        self.assertEqual(voucher.total_credit, Decimal("300.00"))
        self.assertEqual(voucher.entries.count(), 2)

    def test_update_posted_raises(self):
        voucher = self._payment(status=Voucher.STATUS_POSTED)
        with self.assertRaises(DocumentStateError):
            update_voucher(voucher, narration="nope")

    def test_update_with_posted_status_posts(self):
        voucher = update_voucher(self._payment(), status=Voucher.STATUS_POSTED)
        self.assertTrue(voucher.is_posted)

    def test_delete_removes_journal_twin_and_restores_balances(self):
        voucher = self._payment(status=Voucher.STATUS_POSTED)
        twin = create_journal_entry(
            entry_no=voucher.voucher_number,
            entry_date=TODAY,
            lines=[
                {"account": self.c.rent, "debit": "250"},
                {"account": self.c.cash, "credit": "250"},
            ],
        )
        post_journal_entry(twin)

        result = delete_voucher(voucher)

        self.assertEqual(result["deletedJournalEntries"], 1)
        self.assertEqual(result["reversedAccounts"], 2)
        self.assertFalse(JournalEntry.objects.filter(entry_no="PV-001").exists())

        self.c.cash.refresh_from_db()
        self.assertEqual(self.c.cash.current_balance, Decimal("1000.00"))

    def test_delete_draft_reverses_nothing(self):
        result = delete_voucher(self._payment())
        self.assertEqual(result["reversedAccounts"], 0)
        self.assertFalse(Voucher.objects.exists())

    def test_system_vouchers_are_numbered_sequentially(self):
        entries = [
            {"account": self.c.cash, "debit": "5"},
            {"account": self.c.sales, "credit": "5"},
        ]
        first = create_system_voucher(type="journal", entries=entries)
        second = create_system_voucher(type="journal", entries=entries)

        self.assertEqual(first.voucher_number, "JV-0001")
        self.assertEqual(second.voucher_number, "JV-0002")
        self.assertTrue(second.is_posted)


class VoucherTypeTests(TestCase):
    def test_numeric_aliases(self):
        self.assertEqual(normalize_voucher_type("1"), "payment")
        self.assertEqual(normalize_voucher_type("2"), "receipt")
        self.assertEqual(normalize_voucher_type("3"), "journal")

    def test_all_and_blank_mean_no_filter(self):
        self.assertIsNone(normalize_voucher_type("all"))
        self.assertIsNone(normalize_voucher_type(""))

    def test_names_are_lowercased(self):
        self.assertEqual(normalize_voucher_type("Contra"), "contra")
