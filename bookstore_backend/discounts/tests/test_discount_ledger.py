# discounts/tests/test_discount_ledger.py

from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from discounts.models import DiscountCode, DiscountRedemption
from discounts.services.discount_ledger import (
    compute_discount_amount,
    customer_key,
    preview_discount,
    redeem_discount,
    validate_discount,
)
from discounts.services.exceptions import (
    BelowMinimum,
    CodeNotFound,
    Expired,
    Inactive,
    NotStarted,
    PerCustomerLimitReached,
    UsageLimitReached,
)
from orders.models import Order


def _code(code="SAVE10", **extra):
    fields = {"type": DiscountCode.TYPE_PERCENTAGE, "value": Decimal("10")}
    fields.update(extra)
    return DiscountCode.objects.create(code=code, **fields)


def _order(code="ORD-TEST01", phone="+216 20 123 456"):
    return Order.objects.create(
        order_code=code,
        customer_name="Amina Ben Salah",
        phone=phone,
        city="Tunis",
        address="12 Rue de Marseille",
        subtotal=Decimal("25.500"),
    )


class ComputeDiscountAmountTests(TestCase):
    def test_percentage_capped_by_max_discount_amount(self):
        d = _code(max_discount_amount=Decimal("3"))
        self.assertEqual(compute_discount_amount(d, Decimal("25.500")), Decimal("2.550"))
        self.assertEqual(compute_discount_amount(d, Decimal("80.000")), Decimal("3.000"))

    def test_fixed_amount_never_exceeds_subtotal(self):
        d = _code(code="FLAT20", type=DiscountCode.TYPE_FIXED, value=Decimal("20"))
        self.assertEqual(compute_discount_amount(d, Decimal("12.400")), Decimal("12.400"))
        self.assertEqual(compute_discount_amount(d, Decimal("50")), Decimal("20.000"))

    def test_zero_subtotal_gives_zero(self):
        self.assertEqual(compute_discount_amount(_code(), Decimal("0")), Decimal("0.000"))

    def test_percentage_rounds_half_up_to_three_places(self):
        d = _code(code="P15", value=Decimal("15"))
        self.assertEqual(compute_discount_amount(d, Decimal("10.333")), Decimal("1.550"))


class ValidateDiscountTests(TestCase):
    """
    GUARANTEES:
    - one error kind per rule, first failure wins
    - validation is a pure read
    """

    def setUp(self):
        self.now = timezone.now()

    def test_lookup_is_case_insensitive(self):
        _code()
        applied = validate_discount("  save10 ", Decimal("20"))
        self.assertEqual(applied.code, "SAVE10")
        self.assertEqual(applied.amount, Decimal("2.000"))

    def test_not_found(self):
        with self.assertRaises(CodeNotFound) as ctx:
            validate_discount("NOPE", Decimal("20"))
        self.assertEqual(ctx.exception.code, "discount_code_not_found")

    def test_blank_code_is_not_found(self):
        with self.assertRaises(CodeNotFound):
            validate_discount("   ", Decimal("20"))

    def test_inactive(self):
        _code(is_active=False)
        with self.assertRaises(Inactive):
            validate_discount("SAVE10", Decimal("20"))

    def test_not_started(self):
        _code(start_date=self.now + timedelta(days=1))
        with self.assertRaises(NotStarted):
            validate_discount("SAVE10", Decimal("20"), now=self.now)

    def test_expired(self):
        _code(end_date=self.now - timedelta(seconds=1))
        with self.assertRaises(Expired) as ctx:
            validate_discount("SAVE10", Decimal("20"), now=self.now)
        self.assertIn("end_date", ctx.exception.to_dict())

    def test_usage_limit_reached(self):
        _code(usage_limit=2, usage_count=2)
        with self.assertRaises(UsageLimitReached):
            validate_discount("SAVE10", Decimal("20"))

    def test_below_minimum_reports_threshold(self):
        _code(min_order_total=Decimal("30"))
        with self.assertRaises(BelowMinimum) as ctx:
            validate_discount("SAVE10", Decimal("25.500"))
        self.assertEqual(ctx.exception.min_order_total, Decimal("30.000"))
        self.assertEqual(ctx.exception.to_dict()["min_order_total"], "30.000")

    def test_expiry_checked_before_minimum(self):
        _code(min_order_total=Decimal("30"), end_date=self.now - timedelta(days=1))
        with self.assertRaises(Expired):
            validate_discount("SAVE10", Decimal("1"), now=self.now)

    def test_validation_is_idempotent_and_writes_nothing(self):
        d = _code(usage_limit=5)
        first = validate_discount("SAVE10", Decimal("25.500"), now=self.now)
        second = validate_discount("SAVE10", Decimal("25.500"), now=self.now)

        self.assertEqual(first.amount, second.amount)
        d.refresh_from_db()
        self.assertEqual(d.usage_count, 0)
        self.assertEqual(DiscountRedemption.objects.count(), 0)

    def test_per_customer_limit_keyed_by_normalized_phone(self):
        d = _code(per_user_limit=1)
        order = _order()
        DiscountRedemption.objects.create(
            discount_code=d, order=order, phone=customer_key("+216 20-123-456")
        )

        with self.assertRaises(PerCustomerLimitReached):
            validate_discount("SAVE10", Decimal("20"), phone="+216 20 123 456")

        # a different customer is unaffected
        applied = validate_discount("SAVE10", Decimal("20"), phone="+216 99 000 111")
        self.assertEqual(applied.amount, Decimal("2.000"))


class RedeemDiscountTests(TestCase):
    def test_redeem_increments_once_and_records_redemption(self):
        d = _code(usage_limit=3)
        applied = validate_discount("SAVE10", Decimal("25.500"))
        order = _order()

        redemption = redeem_discount(applied, order=order, phone=order.phone, email="A@B.com")

        d.refresh_from_db()
        self.assertEqual(d.usage_count, 1)
        self.assertEqual(redemption.phone, "+21620123456")
        self.assertEqual(redemption.email, "a@b.com")

    def test_redeem_lost_race_raises_usage_limit(self):
        d = _code(usage_limit=1)
        applied = validate_discount("SAVE10", Decimal("25.500"))

        # another order took the last use after our validation
        DiscountCode.objects.filter(pk=d.pk).update(usage_count=1)

        with self.assertRaises(UsageLimitReached):
            redeem_discount(applied, order=_order(), phone="+216 20 123 456")

        d.refresh_from_db()
        self.assertEqual(d.usage_count, 1)
        self.assertEqual(DiscountRedemption.objects.count(), 0)

    def test_redeem_after_deactivation_raises_inactive(self):
        d = _code()
        applied = validate_discount("SAVE10", Decimal("25.500"))
        DiscountCode.objects.filter(pk=d.pk).update(is_active=False)

        with self.assertRaises(Inactive):
            redeem_discount(applied, order=_order(), phone="+216 20 123 456")


class PreviewDiscountTests(TestCase):
    def test_preview_success(self):
        _code(max_discount_amount=Decimal("3"))
        result = preview_discount("save10", Decimal("25.500"))
        self.assertTrue(result.ok)
        self.assertEqual(result.value.amount, Decimal("2.550"))

    def test_preview_failure_is_a_result_not_an_exception(self):
        _code(min_order_total=Decimal("30"))
        result = preview_discount("SAVE10", Decimal("25.500"))
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "discount_below_minimum")
