# discounts/services/discount_ledger.py

"""
DISCOUNT LEDGER

Purpose:
- Validate a discount code against its constraints for a given subtotal.
- Compute the discount amount (caps applied in a fixed order).
- Redeem a code inside the order transaction (usage count + redemption row).

Hard rules:
- validate_discount() is a pure read: same code + subtotal + time + state
  gives the same decision, and nothing is written.
- Validation runs again at order commit even if the checkout page already
  previewed the code (time, subtotal or usage count may have moved).
- usage_count is incremented by a conditional UPDATE that states the limit
  in the WHERE clause; the affected-row count tells us if we lost a race.
  It runs inside the caller's transaction, so a failed order write never
  leaves an increment behind.

Validation order (first failure wins):
  not found -> inactive -> not started -> expired -> usage limit
  -> below minimum -> per-customer limit
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal

from django.db.models import F, Q
from django.utils import timezone

from discounts.models import DiscountCode, DiscountRedemption
from discounts.services.exceptions import (
    BelowMinimum,
    CodeNotFound,
    DiscountError,
    Expired,
    Inactive,
    NotStarted,
    PerCustomerLimitReached,
    UsageLimitReached,
)
from orders.services.money import ZERO, money
from orders.services.results import ServiceResult

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")

_PHONE_NOISE = re.compile(r"[\s\-]")


@dataclass(frozen=True)
class AppliedDiscount:
    discount: DiscountCode
    code: str
    subtotal: Decimal
    amount: Decimal


def customer_key(phone) -> str:
    """Guest identity for per-customer limits: the phone without spaces/dashes."""
    return _PHONE_NOISE.sub("", str(phone or "").strip())


def find_discount_code(code, *, for_update: bool = False) -> DiscountCode | None:
    normalized = DiscountCode.normalize_code(code)
    if not normalized:
        return None
    qs = DiscountCode.objects.all()
    if for_update:
        qs = qs.select_for_update()
    return qs.filter(code=normalized).first()


def compute_discount_amount(discount: DiscountCode, subtotal) -> Decimal:
    """
    fixed:      value
    percentage: subtotal * value / 100, capped at max_discount_amount
    both:       capped at subtotal (a discount never makes the subtotal negative)
    """
    subtotal = money(subtotal)
    if subtotal <= 0:
        return ZERO

    value = Decimal(str(discount.value))

    if discount.type == DiscountCode.TYPE_FIXED:
        amount = value
    else:
        amount = subtotal * value / HUNDRED
        if discount.max_discount_amount is not None:
            amount = min(amount, Decimal(str(discount.max_discount_amount)))

    amount = min(amount, subtotal)
    return money(max(amount, Decimal("0")))


def _customer_redemptions(discount: DiscountCode, phone) -> int:
    key = customer_key(phone)
    if not key:
        return 0
    return DiscountRedemption.objects.filter(discount_code=discount, phone=key).count()


def validate_discount(
    code,
    subtotal,
    *,
    now=None,
    phone=None,
    for_update: bool = False,
) -> AppliedDiscount:
    normalized = DiscountCode.normalize_code(code)
    discount = find_discount_code(normalized, for_update=for_update)
    if discount is None:
        raise CodeNotFound(normalized)

    if not discount.is_active:
        raise Inactive(discount.code)

    now = now or timezone.now()
    if discount.start_date and now < discount.start_date:
        raise NotStarted(discount.code, start_date=discount.start_date)

    if discount.end_date and now > discount.end_date:
        raise Expired(discount.code, end_date=discount.end_date)

    if discount.usage_limit is not None and discount.usage_count >= discount.usage_limit:
        raise UsageLimitReached(discount.code, usage_limit=discount.usage_limit)

    subtotal = money(subtotal)
    min_total = money(discount.min_order_total)
    if subtotal < min_total:
        raise BelowMinimum(discount.code, min_order_total=min_total, subtotal=subtotal)

    if discount.per_user_limit is not None and phone:
        if _customer_redemptions(discount, phone) >= discount.per_user_limit:
            raise PerCustomerLimitReached(discount.code, per_user_limit=discount.per_user_limit)

    return AppliedDiscount(
        discount=discount,
        code=discount.code,
        subtotal=subtotal,
        amount=compute_discount_amount(discount, subtotal),
    )


def redeem_discount(applied: AppliedDiscount, *, order, phone, email="") -> DiscountRedemption:
    """
    Must be called inside the order's transaction.atomic block.
    """
    discount = applied.discount

    updated = (
        DiscountCode.objects.filter(pk=discount.pk, is_active=True)
        .filter(Q(usage_limit__isnull=True) | Q(usage_count__lt=F("usage_limit")))
        .update(usage_count=F("usage_count") + 1, updated_at=timezone.now())
    )

    if updated != 1:
        current = DiscountCode.objects.filter(pk=discount.pk).first()
        logger.warning(
            "Discount redemption lost a race",
            extra={"discount_code": applied.code, "order_code": order.order_code},
        )
        if current is None:
            raise CodeNotFound(applied.code)
        if not current.is_active:
            raise Inactive(applied.code)
        raise UsageLimitReached(applied.code, usage_limit=current.usage_limit)

    redemption = DiscountRedemption.objects.create(
        discount_code=discount,
        order=order,
        phone=customer_key(phone),
        email=(email or "").strip().lower(),
    )

    logger.info(
        "Discount redeemed",
        extra={
            "discount_code": applied.code,
            "order_code": order.order_code,
            "amount": str(applied.amount),
        },
    )
    return redemption


def preview_discount(code, subtotal, *, phone=None, now=None) -> ServiceResult:
    """
    Checkout preview. Does not reserve anything; placement re-validates.
    """
    try:
        applied = validate_discount(code, subtotal, now=now, phone=phone)
    except DiscountError as exc:
        logger.info(
            "Discount preview rejected",
            extra={"discount_code": exc.discount_code, "reason": exc.code},
        )
        return ServiceResult.failure(exc)
    return ServiceResult.success(applied)
