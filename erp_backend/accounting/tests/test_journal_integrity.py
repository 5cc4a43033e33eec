# accounting/tests/test_journal_integrity.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from accounting.models.journal import JournalEntry, JournalLine
from accounting.services.exceptions import (
    DocumentNumberError,
    DocumentStateError,
    JournalEntryCreationError,
    UnbalancedDocumentError,
)
from accounting.services.journal_entry_service import (
    create_journal_entry,
    next_entry_number,
    post_journal_entry,
)
from accounting.tests.factories import build_chart


class JournalEntryServiceTests(TestCase):
    """
    GUARANTEES:
    - Entries are created as drafts with persisted totals
    - Unbalanced or malformed lines are rejected before anything is written
    - Posting happens once and refreshes the balance projection
    - Posted entries are immutable
    """

    def setUp(self):
        self.c = build_chart()

    def _sale(self, **kwargs):
        return create_journal_entry(
            description="Test sale",
            lines=[
                {"account": self.c.cash, "debit": "100.00", "credit": "0.00"},
                {"account": self.c.sales, "debit": "0.00", "credit": "100.00"},
            ],
            **kwargs,
        )

    def test_create_journal_entry_balanced_creates_lines(self):
        je = self._sale(entry_date=date(2025, 3, 1))

        self.assertIsInstance(je, JournalEntry)
        self.assertEqual(je.status, JournalEntry.STATUS_DRAFT)
        self.assertEqual(je.entry_no, "JV-2025-001")
        self.assertEqual(je.total_debit, Decimal("100.00"))
        self.assertEqual(je.total_credit, Decimal("100.00"))

        lines = JournalLine.objects.filter(journal_entry=je)
        self.assertEqual(lines.count(), 2)
        self.assertEqual(
            list(lines.values_list("line_order", flat=True)), [0, 1]
        )

    def test_draft_does_not_move_balances(self):
        self._sale()
        self.c.cash.refresh_from_db()
        self.assertEqual(self.c.cash.current_balance, Decimal("1000.00"))

    def test_entry_numbers_are_sequential_per_year(self):
        self._sale(entry_date=date(2025, 3, 1))
        self._sale(entry_date=date(2025, 6, 1))
        self.assertEqual(next_entry_number(date(2025, 12, 31)), "JV-2025-003")
        self.assertEqual(next_entry_number(date(2026, 1, 1)), "JV-2026-001")

    def test_unbalanced_raises(self):
        with self.assertRaises(UnbalancedDocumentError):
            create_journal_entry(
                description="Bad entry",
                lines=[
                    {"account": self.c.cash, "debit": "100.00"},
                    {"account": self.c.sales, "credit": "90.00"},
                ],
            )
        self.assertFalse(JournalEntry.objects.exists())

    def test_line_with_both_sides_raises(self):
        with self.assertRaises(JournalEntryCreationError):
            create_journal_entry(
                lines=[
                    {"account": self.c.cash, "debit": "10", "credit": "10"},
                    {"account": self.c.sales, "credit": "0"},
                ],
            )

    def test_negative_amount_raises(self):
        with self.assertRaises(JournalEntryCreationError):
            create_journal_entry(
                lines=[
                    {"account": self.c.cash, "debit": "-10"},
                    {"account": self.c.sales, "credit": "-10"},
                ],
            )

    def test_garbage_amount_raises_creation_error(self):
        with self.assertRaises(JournalEntryCreationError):
            create_journal_entry(
                lines=[
                    {"account": self.c.cash, "debit": "ten"},
                    {"account": self.c.sales, "credit": "10"},
                ],
            )
        self.assertFalse(JournalEntry.objects.exists())

    def test_amounts_round_half_up_to_cents(self):
        je = create_journal_entry(
            lines=[
                {"account": self.c.cash, "debit": "10.005"},
                {"account": self.c.sales, "credit": "10.01"},
            ],
        )
        self.assertEqual(je.total_debit, Decimal("10.01"))
        self.assertEqual(je.total_credit, Decimal("10.01"))

    def test_unknown_account_raises(self):
        with self.assertRaises(JournalEntryCreationError):
            create_journal_entry(
                lines=[
                    {"account": 999999, "debit": "10"},
                    {"account": self.c.sales, "credit": "10"},
                ],
            )

    def test_duplicate_number_raises(self):
        self._sale(entry_no="JE-X")
        with self.assertRaises(DocumentNumberError):
            self._sale(entry_no="JE-X")

    def test_post_refreshes_balances(self):
        je = post_journal_entry(self._sale(), posted_by="alice")

        self.assertTrue(je.is_posted)
        self.assertIsNotNone(je.posted_at)
        self.assertEqual(je.posted_by, "alice")

        self.c.cash.refresh_from_db()
        self.c.sales.refresh_from_db()
        self.assertEqual(self.c.cash.current_balance, Decimal("1100.00"))
        self.assertEqual(self.c.sales.current_balance, Decimal("100.00"))

    def test_double_post_raises(self):
        je = post_journal_entry(self._sale())
        with self.assertRaises(DocumentStateError):
            post_journal_entry(je)

    def test_posted_entry_is_immutable(self):
        je = post_journal_entry(self._sale())
        je.description = "tampered"
        with self.assertRaises(ValidationError):
            je.save()
