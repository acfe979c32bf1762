# orders/services/order_placement.py

"""
ORDER PLACEMENT + STATUS CHANGES (APPLICATION SERVICE)

Purpose:
- Turn a checkout payload into a durable Order (cash on delivery).
- Apply status transitions and delivery-partner assignments.

Hard rules:
- Payload shape is validated before any read or write.
- Prices and titles come from the catalog. The client's per-line price is
  ignored (a mismatch is logged as a tampering signal).
- Creation runs in ONE transaction:
    resolve lines -> check stock -> delivery fee -> discount validation
    -> totals -> order row + items + first status entry
    -> stock decrement -> discount redemption
  Any failure rolls everything back: no order, no decrement, no usage bump.
- The discount is validated again here even if the checkout page already
  previewed it.
- Order-code collisions are retried inside a savepoint, a bounded number of
  times.

Boundary functions (place_order, transition_order, assign_delivery_partner)
never raise domain errors; they return a ServiceResult.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Max
from django.utils import timezone

from delivery.services.delivery_fees import find_delivery_partner, resolve_delivery_fee
from discounts.services.discount_ledger import redeem_discount, validate_discount
from orders.models import Order, OrderItem, OrderStatusEntry
from orders.serializers import OrderInputSerializer
from orders.services.exceptions import (
    DeliveryPartnerNotFoundError,
    InvalidTransitionError,
    OrderNotFoundError,
    OrderServiceError,
    OrderValidationError,
    PersistenceError,
)
from orders.services.money import ZERO, money
from orders.services.order_codes import generate_order_code
from orders.services.order_lifecycle import normalize_status, validate_transition
from orders.services.order_queries import get_order_by_code
from orders.services.results import ServiceResult
from orders.services.stock_ledger import (
    StockLine,
    check_availability,
    reserve_and_decrement,
)

logger = logging.getLogger(__name__)

def _actor_or_none(actor):
    if actor is not None and getattr(actor, "is_authenticated", False):
        return actor
    return None


def _validated_payload(payload) -> dict:
    s = OrderInputSerializer(data=payload)
    if not s.is_valid():
        raise OrderValidationError(s.errors)
    return s.validated_data


def _log_price_tampering(resolved, items):
    for line, item in zip(resolved, items):
        client_price = item.get("price")
        if client_price is None:
            continue
        if money(client_price) != money(line.book.price):
            logger.warning(
                "Client price differs from catalog price",
                extra={
                    "book_id": str(line.book.pk),
                    "client_price": str(client_price),
                    "catalog_price": str(line.book.price),
                },
            )


def _append_status(order: Order, status: str, *, note: str = "", actor=None, at=None):
    last = order.status_history.aggregate(m=Max("sequence")).get("m") or 0
    return OrderStatusEntry.objects.create(
        order=order,
        status=status,
        note=(note or "").strip(),
        updated_by=_actor_or_none(actor),
        updated_at=at or timezone.now(),
        sequence=last + 1,
    )


def _insert_order(**fields) -> Order:
    max_attempts = int(settings.ORDERS["CODE_MAX_ATTEMPTS"])

    for attempt in range(1, max_attempts + 1):
        code = generate_order_code()
        try:
            with transaction.atomic():
                return Order.objects.create(order_code=code, **fields)
        except IntegrityError:
            if not Order.objects.filter(order_code=code).exists():
                raise
            logger.warning(
                "Order code collision, retrying",
                extra={"order_code": code, "attempt": attempt},
            )

    raise PersistenceError(f"Could not allocate a unique order code after {max_attempts} attempts.")


def create_order(payload) -> Order:
    """
    Raises OrderServiceError subclasses. See place_order() for the
    non-raising boundary.
    """
    data = _validated_payload(payload)
    items = data["items"]
    lines = [StockLine(ref=item["ref"], quantity=item["quantity"]) for item in items]
    code = (data.get("discount_code") or "").strip()

    try:
        with transaction.atomic():
            resolved = check_availability(lines)
            _log_price_tampering(resolved, items)

            fee = resolve_delivery_fee(
                partner_id=data.get("delivery_partner") or None,
                fallback_fee=data.get("delivery_fees"),
            )

            subtotal = money(
                sum(
                    (Decimal(str(line.book.price)) * line.quantity for line in resolved),
                    Decimal("0"),
                )
            )

            applied = None
            if code:
                applied = validate_discount(
                    code,
                    subtotal,
                    phone=data["phone"],
                    for_update=True,
                )

            order = _insert_order(
                customer_name=data["customer_name"],
                phone=data["phone"].strip(),
                email=data.get("email") or "",
                city=data["city"],
                address=data["address"],
                notes=data.get("notes") or "",
                subtotal=subtotal,
                discount_code=applied.code if applied else "",
                discount_amount=applied.amount if applied else ZERO,
                delivery_fees=fee.amount,
                delivery_partner=fee.partner,
                payment_method=Order.PAYMENT_COD,
                status=Order.Status.PROCESSING,
            )

            OrderItem.objects.bulk_create(
                [
                    OrderItem(
                        order=order,
                        book=line.book,
                        title=line.book.title,
                        price=money(line.book.price),
                        quantity=line.quantity,
                        position=position,
                    )
                    for position, line in enumerate(resolved)
                ]
            )

            _append_status(order, Order.Status.PROCESSING, at=order.created_at)

            reserve_and_decrement(resolved)

            if applied is not None:
                redeem_discount(applied, order=order, phone=order.phone, email=order.email)

    except DatabaseError as exc:
        logger.exception("Order placement failed in storage")
        raise PersistenceError(retryable=False) from exc

    logger.info(
        "Order placed",
        extra={
            "order_code": order.order_code,
            "total": str(order.total),
            "items": len(resolved),
            "discount_code": order.discount_code or None,
            "delivery_fee_source": fee.source,
        },
    )
    return get_order_by_code(order.order_code)


def place_order(payload) -> ServiceResult:
    try:
        order = create_order(payload)
    except OrderServiceError as exc:
        logger.info("Order rejected", extra={"reason": exc.code})
        return ServiceResult.failure(exc)
    return ServiceResult.success(order)


def _lock_order(order_code) -> Order:
    code = str(order_code or "").strip()
    order = Order.objects.select_for_update().filter(order_code=code).first()
    if order is None:
        raise OrderNotFoundError(code)
    return order


def transition_order(order_code, target_status, *, note=None, actor=None) -> ServiceResult:
    """
    Appends exactly one status entry per applied transition.

    - delivered_at is stamped only when moving into delivered
    - confirmed_at is stamped only on processing -> processing
    """
    try:
        with transaction.atomic():
            order = _lock_order(order_code)
            target = normalize_status(target_status, from_status=order.status)
            validate_transition(order=order, target_status=target, note=note)

            now = timezone.now()
            previous = order.status
            order.status = target
            update_fields = ["status", "updated_at"]

            if target == Order.Status.DELIVERED:
                order.delivered_at = now
                update_fields.append("delivered_at")
            if previous == Order.Status.PROCESSING and target == Order.Status.PROCESSING:
                order.confirmed_at = now
                update_fields.append("confirmed_at")

            order.save(update_fields=update_fields)
            _append_status(order, target, note=note or "", actor=actor, at=now)

    except InvalidTransitionError as exc:
        logger.warning(
            "Order transition rejected",
            extra={
                "order_code": str(order_code),
                "from_status": exc.from_status,
                "to_status": exc.to_status,
                "reason": exc.reason,
            },
        )
        return ServiceResult.failure(exc)
    except OrderServiceError as exc:
        return ServiceResult.failure(exc)
    except DatabaseError:
        logger.exception("Order transition failed in storage", extra={"order_code": str(order_code)})
        return ServiceResult.failure(PersistenceError(retryable=True))

    logger.info(
        "Order transition applied",
        extra={"order_code": order.order_code, "from_status": previous, "to_status": target},
    )
    return ServiceResult.success(get_order_by_code(order.order_code))


def assign_delivery_partner(order_code, partner_id, *, actor=None) -> ServiceResult:
    """
    partner_id=None unassigns. Fees already charged are not recomputed.
    """
    try:
        with transaction.atomic():
            order = _lock_order(order_code)
            if order.is_terminal:
                raise InvalidTransitionError(
                    from_status=order.status,
                    to_status=order.status,
                    reason="order is closed; delivery partner cannot change",
                )

            partner = None
            if partner_id:
                partner = find_delivery_partner(partner_id)
                if partner is None or not partner.is_active:
                    raise DeliveryPartnerNotFoundError(partner_id)

            order.delivery_partner = partner
            order.save(update_fields=["delivery_partner", "updated_at"])

    except OrderServiceError as exc:
        logger.warning(
            "Delivery partner assignment rejected",
            extra={"order_code": str(order_code), "reason": exc.code},
        )
        return ServiceResult.failure(exc)
    except DatabaseError:
        logger.exception("Delivery partner assignment failed in storage")
        return ServiceResult.failure(PersistenceError(retryable=True))

    logger.info(
        "Delivery partner assigned",
        extra={
            "order_code": order.order_code,
            "partner_id": str(partner.pk) if partner else None,
            "actor": getattr(_actor_or_none(actor), "pk", None),
        },
    )
    return ServiceResult.success(get_order_by_code(order.order_code))
