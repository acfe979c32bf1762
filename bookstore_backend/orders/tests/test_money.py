# orders/tests/test_money.py

from decimal import Decimal, InvalidOperation

from django.test import SimpleTestCase

from orders.services.money import ZERO, money, money_str


class MoneyTests(SimpleTestCase):
    def test_rounds_half_up_to_three_places(self):
        self.assertEqual(money("2.5505"), Decimal("2.551"))
        self.assertEqual(money(Decimal("19.9")), Decimal("19.900"))
        self.assertEqual(money(7), Decimal("7.000"))

    def test_blank_is_zero(self):
        self.assertEqual(money(None), ZERO)
        self.assertEqual(money(""), ZERO)

    def test_garbage_raises(self):
        with self.assertRaises(InvalidOperation):
            money("twelve")

    def test_wire_form(self):
        self.assertEqual(money_str("50.5"), "50.500")
        self.assertEqual(money_str(0), "0.000")
