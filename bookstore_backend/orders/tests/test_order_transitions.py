# orders/tests/test_order_transitions.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from delivery.models import DeliveryPartner
from orders.models import Order
from orders.services.order_placement import (
    assign_delivery_partner,
    place_order,
    transition_order,
)
from orders.tests.helpers import line, make_book, order_payload

User = get_user_model()
S = Order.Status


class OrderTransitionTests(TestCase):
    """
    GUARANTEES:
    - every applied transition appends exactly one history entry
    - terminal orders never move
    - delivered_at is set only on delivery
    """

    def setUp(self):
        book = make_book("Thartharah fawq al Nil", price="11.000", stock=10)
        self.order = place_order(order_payload([line(book)])).value
        self.code = self.order.order_code
        self.staff = User.objects.create_user(
            username="ops", email="ops@example.com", password="pw", is_staff=True
        )

    def _history(self):
        return list(Order.objects.get(order_code=self.code).status_history.values_list("status", flat=True))

    def test_ship_then_deliver(self):
        shipped = transition_order(self.code, S.SHIPPED, actor=self.staff)
        self.assertTrue(shipped.ok)
        self.assertIsNone(shipped.value.delivered_at)

        delivered = transition_order(self.code, "delivered", note="Signed by customer")
        self.assertTrue(delivered.ok)
        self.assertIsNotNone(delivered.value.delivered_at)

        self.assertEqual(self._history(), [S.PROCESSING, S.SHIPPED, S.DELIVERED])
        entries = list(delivered.value.status_history.all())
        self.assertEqual(entries[1].updated_by, self.staff)
        self.assertEqual(entries[2].note, "Signed by customer")
        self.assertEqual([e.sequence for e in entries], [1, 2, 3])

    def test_terminal_states_reject_everything(self):
        transition_order(self.code, S.CANCELLED)

        for target in (S.PROCESSING, S.SHIPPED, S.DELIVERED, S.CANCELLED):
            with self.assertLogs("orders.services.order_placement", level="WARNING"):
                result = transition_order(self.code, target)
            self.assertEqual(result.error_code, "invalid_transition")

        self.assertEqual(self._history(), [S.PROCESSING, S.CANCELLED])

    def test_processing_cannot_skip_to_delivered(self):
        result = transition_order(self.code, S.DELIVERED)

        self.assertEqual(result.error_code, "invalid_transition")
        self.assertEqual(result.error.from_status, S.PROCESSING)
        order = Order.objects.get(order_code=self.code)
        self.assertEqual(order.status, S.PROCESSING)
        self.assertIsNone(order.delivered_at)

    def test_cancel_after_shipping_needs_a_note(self):
        transition_order(self.code, S.SHIPPED)

        rejected = transition_order(self.code, S.CANCELLED)
        self.assertEqual(rejected.error_code, "invalid_transition")

        accepted = transition_order(self.code, S.CANCELLED, note="Returned to sender")
        self.assertTrue(accepted.ok)
        self.assertEqual(self._history(), [S.PROCESSING, S.SHIPPED, S.CANCELLED])

    def test_reconfirmation_stamps_confirmed_at(self):
        self.assertIsNone(self.order.confirmed_at)

        result = transition_order(self.code, S.PROCESSING, note="Confirmed by phone")

        self.assertTrue(result.ok)
        self.assertIsNotNone(result.value.confirmed_at)
        self.assertIsNone(result.value.delivered_at)
        self.assertEqual(self._history(), [S.PROCESSING, S.PROCESSING])

    def test_unknown_order(self):
        result = transition_order("ORD-NOPE99", S.SHIPPED)
        self.assertEqual(result.error_code, "order_not_found")

    def test_unknown_status(self):
        result = transition_order(self.code, "lost in transit")
        self.assertEqual(result.error_code, "invalid_transition")
        self.assertEqual(len(self._history()), 1)

    def test_total_is_not_touched_by_transitions(self):
        before = Order.objects.get(order_code=self.code).total
        transition_order(self.code, S.SHIPPED)
        self.assertEqual(Order.objects.get(order_code=self.code).total, before)


class AssignDeliveryPartnerTests(TestCase):
    def setUp(self):
        book = make_book("Al Khubz al Hafi", price="9.500", stock=10)
        self.order = place_order(order_payload([line(book)], deliveryFees="4")).value
        self.code = self.order.order_code
        self.partner = DeliveryPartner.objects.create(name="First Delivery", delivery_fees=Decimal("6"))

    def test_assign_and_unassign(self):
        result = assign_delivery_partner(self.code, self.partner.id)
        self.assertTrue(result.ok)
        self.assertEqual(result.value.delivery_partner, self.partner)
        # fees charged at placement stay
        self.assertEqual(result.value.delivery_fees, Decimal("4.000"))

        result = assign_delivery_partner(self.code, None)
        self.assertTrue(result.ok)
        self.assertIsNone(result.value.delivery_partner)

    def test_inactive_partner_rejected(self):
        self.partner.is_active = False
        self.partner.save()

        result = assign_delivery_partner(self.code, self.partner.id)
        self.assertEqual(result.error_code, "delivery_partner_not_found")

    def test_closed_order_rejected(self):
        transition_order(self.code, Order.Status.CANCELLED)

        result = assign_delivery_partner(self.code, self.partner.id)
        self.assertEqual(result.error_code, "invalid_transition")
