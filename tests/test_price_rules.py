import unittest
from datetime import date
from decimal import Decimal

from warehouse.core.price_rules import initial_price_history, next_price_history


class PriceHistoryTest(unittest.TestCase):
    def test_initial_history_starts_at_cost_price(self):
        history = initial_price_history(Decimal("10.00"), date(2024, 1, 2))
        self.assertEqual(history.previous_price, Decimal("10.00"))
        self.assertEqual(history.best_price, Decimal("10.00"))
        self.assertEqual(history.last_edit_date, date(2024, 1, 2))

    def test_edit_records_replaced_price(self):
        history = initial_price_history(Decimal("10.00"))
        history = next_price_history(history, Decimal("10.00"), Decimal("12.50"), date(2024, 2, 1))
        self.assertEqual(history.previous_price, Decimal("10.00"))
        self.assertEqual(history.best_price, Decimal("10.00"))
        self.assertEqual(history.last_edit_date, date(2024, 2, 1))

    def test_best_price_is_monotonic(self):
        prices = ["10", "12", "8", "9.5", "8", "15", "7.99"]
        current = Decimal(prices[0])
        history = initial_price_history(current)
        best_seen = [history.best_price]
        for value in prices[1:]:
            history = next_price_history(history, current, Decimal(value))
            current = Decimal(value)
            best_seen.append(history.best_price)
        for before, after in zip(best_seen, best_seen[1:]):
            self.assertLessEqual(after, before)
        self.assertEqual(history.best_price, Decimal("7.99"))
        self.assertEqual(history.previous_price, Decimal("15"))

    def test_missing_history_falls_back_to_current_price(self):
        history = next_price_history(None, Decimal("5"), Decimal("6"))
        self.assertEqual(history.best_price, Decimal("5"))


if __name__ == "__main__":
    unittest.main()
