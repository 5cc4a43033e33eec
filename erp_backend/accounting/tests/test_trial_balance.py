# accounting/tests/test_trial_balance.py

from datetime import date
from decimal import Decimal

from django.test import TestCase

from accounting.services.balance_service import get_account_balance
from accounting.services.journal_entry_service import (
    create_journal_entry,
    post_journal_entry,
)
from accounting.services.ledger_source import account_totals, iter_ledger_lines
from accounting.services.trial_balance_service import TrialBalanceService
from accounting.services.voucher_service import create_voucher
from accounting.tests.factories import build_chart

D1 = date(2025, 1, 10)
D2 = date(2025, 1, 20)


def _rows_by_code(rows):
    return {r["code"]: r for r in rows if not r["isSubgroup"]}


class TrialBalanceTests(TestCase):
    """
    GUARANTEES:
    - Posted vouchers and journal entries are combined per account
    - A journal entry sharing a posted voucher's number is counted once
    - A journal entry sharing a draft voucher's number is counted
    - Draft documents never count
    - Header rows precede their accounts and carry their sums
    """

    def setUp(self):
        self.c = build_chart()

        # V-001: Dr Cash 500 / Cr Sales 500
        create_voucher(
            voucher_number="V-001",
            type="journal",
            date=D1,
            entries=[
                {"account": self.c.cash, "debit": "500", "credit": "0"},
                {"account": self.c.sales, "debit": "0", "credit": "500"},
            ],
            status="posted",
        )

        # Same transaction recorded again as a journal entry: must be ignored.
        duplicate = create_journal_entry(
            entry_no="V-001",
            entry_date=D1,
            lines=[
                {"account": self.c.cash, "debit": "500"},
                {"account": self.c.sales, "credit": "500"},
            ],
        )
        post_journal_entry(duplicate)

        je = create_journal_entry(
            entry_date=D2,
            description="Bank deposit and sales",
            lines=[
                {"account": self.c.bank, "debit": "1650"},
                {"account": self.c.sales, "debit": "50"},
                {"account": self.c.cash, "credit": "200"},
                {"account": self.c.sales, "credit": "1500"},
            ],
        )
        post_journal_entry(je)

        # Drafts are invisible to reports.
        create_voucher(
            voucher_number="V-DRAFT",
            type="journal",
            date=D2,
            entries=[
                {"account": self.c.cash, "debit": "9999"},
                {"account": self.c.sales, "credit": "9999"},
            ],
        )

    def test_worked_examples_through_the_ledger(self):
        rows = _rows_by_code(TrialBalanceService().generate())

        self.assertEqual(rows["102001"]["debit"], 1300.0)
        self.assertEqual(rows["102001"]["credit"], 0.0)
        self.assertEqual(rows["701001"]["debit"], 0.0)
        self.assertEqual(rows["701001"]["credit"], 1950.0)
        self.assertEqual(rows["103001"]["debit"], 1650.0)

    def test_duplicate_journal_is_excluded_from_totals(self):
        totals = account_totals()
        self.assertEqual(totals[self.c.cash.id].debit, Decimal("500.00"))
        self.assertEqual(totals[self.c.cash.id].credit, Decimal("200.00"))

        numbers = [line.document_number for line in iter_ledger_lines(account_ids=[self.c.cash.id])]
        self.assertEqual(numbers.count("V-001"), 1)

    def test_header_rows_precede_accounts_and_sum_them(self):
        rows = TrialBalanceService().generate()
        codes = [r["code"] for r in rows]

        self.assertEqual(
            codes[:5], ["1", "102", "102001", "103", "103001"]
        )
        self.assertLess(codes.index("7"), codes.index("701"))
        self.assertLess(codes.index("701"), codes.index("701001"))

        headers = {r["code"]: r for r in rows if r["isSubgroup"]}
        self.assertEqual(headers["1"]["debit"], 2950.0)
        self.assertEqual(headers["102"]["debit"], 1300.0)
        self.assertEqual(headers["7"]["credit"], 1950.0)
        self.assertEqual(headers["1"]["level"], 0)
        self.assertTrue(all(r["level"] == 1 for r in rows if not r["isSubgroup"]))

    def test_rows_follow_chart_order(self):
        account_codes = [r["code"] for r in TrialBalanceService().generate() if not r["isSubgroup"]]
        self.assertEqual(account_codes, sorted(account_codes))

    def test_date_window_is_inclusive(self):
        rows = _rows_by_code(TrialBalanceService().generate(from_date=D1, to_date=D1))
        self.assertEqual(rows["102001"]["debit"], 1500.0)
        self.assertEqual(rows["103001"]["debit"], 0.0)

    def test_dedup_is_scoped_to_the_window(self):
        # Voucher V-001 is outside this window, so its journal twin counts.
        create_voucher(
            voucher_number="V-002",
            type="journal",
            date=D2,
            entries=[
                {"account": self.c.bank, "debit": "10"},
                {"account": self.c.sales, "credit": "10"},
            ],
            status="posted",
        )
        twin = create_journal_entry(
            entry_no="V-002",
            entry_date=D1,
            lines=[
                {"account": self.c.bank, "debit": "10"},
                {"account": self.c.sales, "credit": "10"},
            ],
        )
        post_journal_entry(twin)

        in_window = account_totals(to_date=D1)
        self.assertEqual(in_window[self.c.bank.id].debit, Decimal("10.00"))

        full = account_totals()
        self.assertEqual(full[self.c.bank.id].debit, Decimal("1660.00"))

    def test_journal_sharing_a_draft_voucher_number_still_counts(self):
        create_voucher(
            voucher_number="V-777",
            type="journal",
            date=D2,
            entries=[
                {"account": self.c.bank, "debit": "20"},
                {"account": self.c.sales, "credit": "20"},
            ],
        )
        je = create_journal_entry(
            entry_no="V-777",
            entry_date=D2,
            lines=[
                {"account": self.c.bank, "debit": "20"},
                {"account": self.c.sales, "credit": "20"},
            ],
        )
        post_journal_entry(je)

        totals = account_totals()
        self.assertEqual(totals[self.c.bank.id].debit, Decimal("1670.00"))

        rows = _rows_by_code(TrialBalanceService().generate())
        self.assertEqual(rows["103001"]["debit"], 1670.0)
        self.assertEqual(rows["701001"]["credit"], 1970.0)

    def test_totals_exclude_header_rows(self):
        totals = TrialBalanceService.totals(TrialBalanceService().generate())
        self.assertEqual(totals["debit"], 2950.0)
        self.assertEqual(totals["credit"], 1950.0)
        self.assertFalse(totals["balanced"])

    def test_balance_as_of_date(self):
        self.assertEqual(get_account_balance(self.c.cash, as_of=D1), Decimal("1500.00"))
        self.assertEqual(get_account_balance(self.c.cash), Decimal("1300.00"))

    def test_current_balance_projection_matches_rule(self):
        self.c.cash.refresh_from_db()
        self.c.sales.refresh_from_db()
        self.assertEqual(self.c.cash.current_balance, Decimal("1300.00"))
        self.assertEqual(self.c.sales.current_balance, Decimal("1950.00"))

    def test_opening_balance_counts_without_activity(self):
        rows = _rows_by_code(
            TrialBalanceService().generate(
                from_date=date(1990, 1, 1), to_date=date(1990, 1, 2)
            )
        )
        self.assertEqual(rows["102001"]["debit"], 1000.0)
        self.assertEqual(rows["701001"]["credit"], 0.0)


class EmptyTrialBalanceTests(TestCase):
    def test_no_accounts_returns_no_rows(self):
        self.assertEqual(TrialBalanceService().generate(), [])
