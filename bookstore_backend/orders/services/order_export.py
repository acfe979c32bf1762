# orders/services/order_export.py

"""
ORDER EXPORT (staff back-office)

One row per order, newest first. Column names are the OrderSerializer wire
names, so a spreadsheet and the tracking API describe orders the same way.

- money columns are three-decimal strings
- `items` flattens the lines: "title xN @ price | title xN @ price"
- `deliveryPartner` is the partner name (blank when unassigned)
"""

from __future__ import annotations

import csv

from orders.services.money import money_str
from orders.services.order_queries import filtered_orders

EXPORT_COLUMNS = [
    "orderCode",
    "createdAt",
    "status",
    "customerName",
    "phone",
    "email",
    "city",
    "address",
    "subtotal",
    "discountCode",
    "discountAmount",
    "deliveryFees",
    "total",
    "paymentMethod",
    "deliveryPartner",
    "items",
    "notes",
]

# the admin export accepts the storefront names for the date bounds
PARAM_ALIASES = {"from": "created_from", "to": "created_to"}


def export_filters(params) -> dict:
    filters = {}
    for key, value in params.items():
        filters[PARAM_ALIASES.get(key, key)] = value
    return filters


def items_text(order) -> str:
    return " | ".join(
        f"{item.title} x{item.quantity} @ {money_str(item.price)}" for item in order.items.all()
    )


def export_row(order) -> list[str]:
    return [
        order.order_code,
        order.created_at.isoformat() if order.created_at else "",
        order.status,
        order.customer_name,
        order.phone,
        order.email or "",
        order.city,
        order.address,
        money_str(order.subtotal),
        order.discount_code or "",
        money_str(order.discount_amount),
        money_str(order.delivery_fees),
        money_str(order.total),
        order.payment_method,
        order.delivery_partner.name if order.delivery_partner_id else "",
        items_text(order),
        order.notes or "",
    ]


def orders_for_export(filters=None):
    """Raises OrderValidationError on filter values it cannot parse."""
    return filtered_orders(filters)


def write_orders_csv(stream, orders) -> int:
    writer = csv.writer(stream)
    writer.writerow(EXPORT_COLUMNS)
    count = 0
    for order in orders:
        writer.writerow(export_row(order))
        count += 1
    return count
