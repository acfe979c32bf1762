# orders/tests/test_api.py

import csv
import io
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import Book
from delivery.models import DeliveryPartner
from orders.models import Order
from orders.services.order_export import EXPORT_COLUMNS
from orders.services.order_placement import place_order, transition_order
from orders.tests.helpers import line, make_book, order_payload

User = get_user_model()


class PlaceOrderApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.kalila = make_book("Kalila wa Dimna", price="10.250", stock=5)
        self.diwan = make_book("Diwan al Mutanabbi", price="5.000", stock=3)

    def test_create_returns_201_with_camel_case_body(self):
        payload = order_payload([line(self.kalila, 2), line(self.diwan, 1)], deliveryFees="25")

        res = self.client.post("/api/orders/", payload, format="json")

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["subtotal"], "25.500")
        self.assertEqual(res.data["deliveryFees"], "25.000")
        self.assertEqual(res.data["discountAmount"], "0.000")
        self.assertEqual(res.data["total"], "50.500")
        self.assertEqual(res.data["status"], Order.Status.PROCESSING)
        self.assertEqual(res.data["paymentMethod"], "cash_on_delivery")
        self.assertEqual(res.data["customerName"], "Amina Ben Salah")
        self.assertEqual(len(res.data["items"]), 2)
        self.assertEqual(res.data["items"][0]["lineTotal"], "20.500")
        self.assertEqual(len(res.data["statusHistory"]), 1)
        self.assertIsNone(res.data["deliveredAt"])
        self.assertTrue(Order.objects.filter(order_code=res.data["orderCode"]).exists())

    def test_insufficient_stock_is_409(self):
        Book.objects.filter(pk=self.diwan.pk).update(stock=0)

        res = self.client.post("/api/orders/", order_payload([line(self.diwan)]), format="json")

        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["error"]["code"], "insufficient_stock")
        self.assertEqual(Order.objects.count(), 0)

    def test_validation_error_is_400(self):
        res = self.client.post("/api/orders/", order_payload([]), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "validation_error")

    def test_unknown_book_is_404(self):
        payload = order_payload([{"slug": "missing-book", "quantity": 1}])

        res = self.client.post("/api/orders/", payload, format="json")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "item_not_found")

    def test_unknown_discount_is_400(self):
        payload = order_payload([line(self.kalila)], discountCode="GHOST")

        res = self.client.post("/api/orders/", payload, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "discount_code_not_found")


class TrackOrderApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        book = make_book("Al Ayyam", price="7.000", stock=10)
        self.order = place_order(order_payload([line(book)])).value

    def test_detail(self):
        res = self.client.get(f"/api/orders/{self.order.order_code}/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["orderCode"], self.order.order_code)

    def test_detail_unknown_is_404(self):
        res = self.client.get("/api/orders/ORD-NOPE99/")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "order_not_found")

    def test_track_by_code(self):
        res = self.client.post(
            "/api/orders/track/", {"orderCode": self.order.order_code}, format="json"
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["mode"], "code")
        self.assertEqual(len(res.data["orders"]), 1)

    def test_track_by_phone(self):
        res = self.client.post("/api/orders/track/", {"phone": "+216 20 123 456"}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["mode"], "phone")
        self.assertEqual(res.data["orders"][0]["orderCode"], self.order.order_code)

    def test_track_without_match_is_404(self):
        res = self.client.post("/api/orders/track/", {"phone": "+216 99 999 999"}, format="json")
        self.assertEqual(res.status_code, 404)

    def test_track_needs_code_or_phone(self):
        res = self.client.post("/api/orders/track/", {}, format="json")
        self.assertEqual(res.status_code, 400)


class CustomerOrdersApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        book = make_book("Al Ayyam", price="7.000", stock=10)
        self.mine = place_order(order_payload([line(book)])).value
        place_order(order_payload([line(book)], email="other@example.com", phone="+216 50 000 000"))

    def test_requires_authentication(self):
        res = self.client.get("/api/orders/customer/")
        self.assertIn(res.status_code, (401, 403))

    def test_lists_only_own_orders(self):
        user = User.objects.create_user(username="amina", email="amina@example.com", password="pw")
        self.client.force_authenticate(user)

        res = self.client.get("/api/orders/customer/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([o["orderCode"] for o in res.data], [self.mine.order_code])

    def test_user_without_email_sees_nothing(self):
        user = User.objects.create_user(username="noemail", password="pw")
        self.client.force_authenticate(user)

        res = self.client.get("/api/orders/customer/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, [])


class AdminOrderApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.staff = User.objects.create_user(
            username="ops", email="ops@example.com", password="pw", is_staff=True
        )
        book = make_book("Al Ayyam", price="7.000", stock=10)
        self.order = place_order(order_payload([line(book)])).value
        self.url = f"/api/admin/orders/{self.order.order_code}/"

    def test_non_staff_is_rejected(self):
        res = self.client.get("/api/admin/orders/")
        self.assertIn(res.status_code, (401, 403))

        customer = User.objects.create_user(username="c", email="c@example.com", password="pw")
        self.client.force_authenticate(customer)
        res = self.client.patch(self.url, {"status": "shipped"}, format="json")
        self.assertEqual(res.status_code, 403)

    def test_list_with_status_filter(self):
        self.client.force_authenticate(self.staff)

        res = self.client.get("/api/admin/orders/", {"status": "processing", "limit": "5"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 1)

        res = self.client.get("/api/admin/orders/", {"status": "shipped"})
        self.assertEqual(res.data, [])

    def test_list_rejects_unparseable_filters(self):
        self.client.force_authenticate(self.staff)

        res = self.client.get("/api/admin/orders/", {"partner": "not-a-uuid"})

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "validation_error")
        self.assertIn("partner", res.data["error"]["errors"])

    def test_patch_status_records_actor(self):
        self.client.force_authenticate(self.staff)

        res = self.client.patch(self.url, {"status": "shipped", "note": "Picked up"}, format="json")

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["status"], Order.Status.SHIPPED)
        last = res.data["statusHistory"][-1]
        self.assertEqual(last["updatedBy"], "ops")
        self.assertEqual(last["note"], "Picked up")

    def test_patch_invalid_transition_is_400(self):
        self.client.force_authenticate(self.staff)

        res = self.client.patch(self.url, {"status": "delivered"}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "invalid_transition")

    def test_patch_assigns_partner(self):
        partner = DeliveryPartner.objects.create(name="Rapid Poste", delivery_fees=Decimal("7"))
        self.client.force_authenticate(self.staff)

        res = self.client.patch(self.url, {"deliveryPartnerId": str(partner.id)}, format="json")

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["deliveryPartner"]["name"], "Rapid Poste")

    def test_patch_unknown_partner_is_404(self):
        self.client.force_authenticate(self.staff)

        res = self.client.patch(
            self.url,
            {"deliveryPartnerId": "6f1c2f8e-0000-4000-8000-000000000000"},
            format="json",
        )

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "delivery_partner_not_found")

    def test_patch_empty_body_is_400(self):
        self.client.force_authenticate(self.staff)
        res = self.client.patch(self.url, {}, format="json")
        self.assertEqual(res.status_code, 400)


class AdminOrderExportApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.staff = User.objects.create_user(
            username="ops", email="ops@example.com", password="pw", is_staff=True
        )
        book = make_book("Al Ayyam", price="7.000", stock=10)
        self.first = place_order(order_payload([line(book)])).value
        self.second = place_order(
            order_payload(
                [line(book, 2)],
                customerName="Youssef Trabelsi",
                phone="+216 98 765 432",
                deliveryFees="3.5",
                notes="Call before, please",
            )
        ).value
        transition_order(self.first.order_code, "shipped")

    def _rows(self, res):
        return list(csv.reader(io.StringIO(res.content.decode("utf-8-sig"))))

    def test_staff_only(self):
        res = self.client.get("/api/admin/orders/export/")
        self.assertIn(res.status_code, (401, 403))

    def test_csv_header_rows_and_money(self):
        self.client.force_authenticate(self.staff)

        res = self.client.get("/api/admin/orders/export/")

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res["Content-Type"].startswith("text/csv"))
        self.assertIn("attachment;", res["Content-Disposition"])
        self.assertTrue(res.content.startswith("\ufeff".encode("utf-8")))

        rows = self._rows(res)
        self.assertEqual(rows[0], EXPORT_COLUMNS)
        self.assertEqual(len(rows), 3)

        newest = dict(zip(rows[0], rows[1]))
        self.assertEqual(newest["orderCode"], self.second.order_code)
        self.assertEqual(newest["subtotal"], "14.000")
        self.assertEqual(newest["deliveryFees"], "3.500")
        self.assertEqual(newest["discountAmount"], "0.000")
        self.assertEqual(newest["total"], "17.500")
        self.assertEqual(newest["items"], "Al Ayyam x2 @ 7.000")
        self.assertEqual(newest["notes"], "Call before, please")
        self.assertEqual(newest["status"], Order.Status.PROCESSING)

    def test_status_filter(self):
        self.client.force_authenticate(self.staff)

        res = self.client.get("/api/admin/orders/export/", {"status": "shipped"})

        rows = self._rows(res)
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1][0], self.first.order_code)
        self.assertEqual(rows[1][2], Order.Status.SHIPPED)

    def test_from_to_date_bounds(self):
        self.client.force_authenticate(self.staff)

        res = self.client.get("/api/admin/orders/export/", {"from": "2000-01-01", "to": "2000-01-02"})
        self.assertEqual(self._rows(res), [EXPORT_COLUMNS])

        res = self.client.get("/api/admin/orders/export/", {"from": "garbage"})
        self.assertEqual(res.status_code, 400)
        self.assertIn("created_from", res.data["error"]["errors"])

    def test_json_output(self):
        self.client.force_authenticate(self.staff)

        res = self.client.get("/api/admin/orders/export/", {"output": "json"})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            [o["orderCode"] for o in res.data],
            [self.second.order_code, self.first.order_code],
        )
        self.assertEqual(res.data[0]["total"], "17.500")

    def test_unknown_output_is_400(self):
        self.client.force_authenticate(self.staff)
        res = self.client.get("/api/admin/orders/export/", {"output": "xlsx"})
        self.assertEqual(res.status_code, 400)
