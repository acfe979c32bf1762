# orders/services/order_queries.py

"""
ORDER QUERY SERVICE

Read-only lookups. Every query prefetches items (with their book), the
status timeline and the delivery partner, so serializers never trigger
per-row queries.

Privacy rule:
- get_orders_for_customer() with neither email nor phone returns [];
  it never falls back to "all orders".
"""

from __future__ import annotations

from django.conf import settings
from django.db.models import Prefetch, Q

from orders.filters import OrderFilter
from orders.models import Order, OrderItem, OrderStatusEntry
from orders.services.exceptions import OrderValidationError


def order_queryset():
    return Order.objects.select_related("delivery_partner").prefetch_related(
        Prefetch("items", queryset=OrderItem.objects.select_related("book").order_by("position", "id")),
        Prefetch(
            "status_history",
            queryset=OrderStatusEntry.objects.select_related("updated_by").order_by("sequence"),
        ),
    )


def get_order_by_code(code) -> Order | None:
    code = str(code or "").strip()
    if not code:
        return None
    return order_queryset().filter(order_code=code).first()


def get_orders_for_customer(email=None, phone=None) -> list[Order]:
    email = str(email or "").strip().lower()
    phone = str(phone or "").strip()

    condition = Q()
    if email:
        condition |= Q(email=email)
    if phone:
        condition |= Q(phone=phone)

    if not condition:
        return []

    return list(order_queryset().filter(condition).order_by("-created_at"))


def _clamp_limit(limit) -> int:
    cfg = settings.ORDERS
    default = int(cfg["LIST_DEFAULT_LIMIT"])
    maximum = int(cfg["LIST_MAX_LIMIT"])
    try:
        value = int(limit) if limit not in (None, "") else default
    except (TypeError, ValueError):
        value = default
    return max(1, min(value, maximum))


def filtered_orders(filters=None):
    """
    Unsliced queryset, for callers that paginate or stream themselves.

    A value the filter cannot parse (bad uuid, bad date) raises
    OrderValidationError instead of being dropped.
    """
    qs = order_queryset().order_by("-created_at")
    if not filters:
        return qs

    filterset = OrderFilter(data=filters, queryset=qs)
    if not filterset.is_valid():
        errors = {
            field: [e["message"] for e in messages]
            for field, messages in filterset.errors.get_json_data().items()
        }
        raise OrderValidationError(errors, message="Invalid order filters.")
    return filterset.qs


def list_orders(filters=None, limit=None) -> list[Order]:
    return list(filtered_orders(filters)[: _clamp_limit(limit)])
