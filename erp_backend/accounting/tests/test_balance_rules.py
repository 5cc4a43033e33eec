# accounting/tests/test_balance_rules.py

from decimal import Decimal

from django.test import SimpleTestCase

from accounting.balance_rules import (
    ACCOUNT_CLASSES,
    assert_balanced,
    calculate_account_balance,
    calculate_balance_change,
    document_totals,
    get_trial_balance_amounts,
    is_debit_normal,
    money,
)
from accounting.services.exceptions import (
    UnbalancedDocumentError,
    UnknownAccountTypeError,
)


class BalanceRuleTests(SimpleTestCase):
    """
    GUARANTEES:
    - Debit-normal family: opening + debit - credit
    - Credit-normal family: opening + credit - debit
    - Type comparison is case-insensitive
    - Unknown types fail loudly instead of defaulting
    """

    def test_cash_worked_example(self):
        balance = calculate_account_balance("1000", "500", "200", "asset")
        self.assertEqual(balance, Decimal("1300.00"))

        amounts = get_trial_balance_amounts(balance, "asset")
        self.assertEqual(amounts.debit, Decimal("1300.00"))
        self.assertEqual(amounts.credit, Decimal("0.00"))

    def test_sales_revenue_worked_example(self):
        balance = calculate_account_balance("0", "50", "2000", "revenue")
        self.assertEqual(balance, Decimal("1950.00"))

        amounts = get_trial_balance_amounts(balance, "revenue")
        self.assertEqual(amounts.debit, Decimal("0.00"))
        self.assertEqual(amounts.credit, Decimal("1950.00"))

    def test_debit_normal_family(self):
        for account_type in ("asset", "expense", "cost"):
            self.assertTrue(is_debit_normal(account_type))
            self.assertEqual(
                calculate_balance_change("10", "4", account_type), Decimal("6.00")
            )

    def test_credit_normal_family(self):
        for account_type in ("liability", "equity", "revenue"):
            self.assertFalse(is_debit_normal(account_type))
            self.assertEqual(
                calculate_balance_change("10", "4", account_type), Decimal("-6.00")
            )

    def test_type_is_case_insensitive(self):
        self.assertEqual(
            calculate_account_balance("0", "100", "0", "Asset"),
            calculate_account_balance("0", "100", "0", "ASSET"),
        )
        self.assertTrue(is_debit_normal(" Cost "))

    def test_unknown_type_raises(self):
        with self.assertRaises(UnknownAccountTypeError):
            calculate_balance_change("1", "0", "contra-asset")
        with self.assertRaises(UnknownAccountTypeError):
            is_debit_normal(None)

    def test_negative_balance_moves_to_opposite_column(self):
        amounts = get_trial_balance_amounts("-250", "asset")
        self.assertEqual(amounts.debit, Decimal("0.00"))
        self.assertEqual(amounts.credit, Decimal("250.00"))

        amounts = get_trial_balance_amounts("-75.5", "liability")
        self.assertEqual(amounts.debit, Decimal("75.50"))
        self.assertEqual(amounts.credit, Decimal("0.00"))

    def test_zero_balance_has_no_column(self):
        amounts = get_trial_balance_amounts("0", "equity")
        self.assertEqual((amounts.debit, amounts.credit), (Decimal("0.00"), Decimal("0.00")))

    def test_columns_are_mutually_exclusive(self):
        for balance in ("-10", "0", "10"):
            for account_type in ("asset", "liability", "equity", "revenue", "expense", "cost"):
                amounts = get_trial_balance_amounts(balance, account_type)
                self.assertFalse(amounts.debit > 0 and amounts.credit > 0)

    def test_columns_recover_the_signed_balance(self):
        for balance in (Decimal("-42.50"), Decimal("0.00"), Decimal("42.50")):
            for account_type in ACCOUNT_CLASSES:
                with self.subTest(balance=balance, account_type=account_type):
                    amounts = get_trial_balance_amounts(balance, account_type)
                    if is_debit_normal(account_type):
                        self.assertEqual(amounts.debit - amounts.credit, balance)
                    else:
                        self.assertEqual(amounts.credit - amounts.debit, balance)

                    # Posting the columns onto a zero opening gives the balance back.
                    rebuilt = calculate_account_balance(
                        "0", amounts.debit, amounts.credit, account_type
                    )
                    self.assertEqual(rebuilt, balance)


class DocumentBalanceTests(SimpleTestCase):
    def test_money_rounds_half_up(self):
        self.assertEqual(money("1.005"), Decimal("1.01"))
        self.assertEqual(money(None), Decimal("0.00"))

    def test_money_rejects_garbage(self):
        with self.assertRaises(ValueError):
            money("abc")

    def test_document_totals_accepts_dicts(self):
        totals = document_totals(
            [{"debit": "100", "credit": None}, {"debit": 0, "credit": "100.00"}]
        )
        self.assertEqual(totals, (Decimal("100.00"), Decimal("100.00")))

    def test_assert_balanced_returns_totals(self):
        self.assertEqual(
            assert_balanced([{"debit": "40"}, {"credit": "40"}]),
            (Decimal("40.00"), Decimal("40.00")),
        )

    def test_assert_balanced_rejects_unbalanced(self):
        with self.assertRaises(UnbalancedDocumentError):
            assert_balanced([{"debit": "100"}, {"credit": "99.99"}])
