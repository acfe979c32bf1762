# catalog/services/stock_alerts.py

"""
LOW-STOCK REPORT

Purpose:
- Admin dashboard alert: published books at or below the low-stock threshold.

Rules:
- Threshold comes from settings.ORDERS["LOW_STOCK_THRESHOLD"] (one value
  for the whole catalog, matching the dashboard badge).
- Out-of-stock (0) books are included; they are the most urgent rows.
"""

from __future__ import annotations

from django.conf import settings

from catalog.models import Book

STOCK_IN = "in-stock"
STOCK_LOW = "low-stock"
STOCK_OUT = "out-of-stock"


def low_stock_threshold() -> int:
    return int(settings.ORDERS["LOW_STOCK_THRESHOLD"])


def stock_status(book) -> str:
    stock = int(getattr(book, "stock", 0) or 0)
    if stock == 0:
        return STOCK_OUT
    if stock <= low_stock_threshold():
        return STOCK_LOW
    return STOCK_IN


def low_stock_books(limit: int | None = None):
    qs = (
        Book.objects.filter(
            status=Book.Status.PUBLISHED,
            stock__lte=low_stock_threshold(),
        )
        .only("id", "slug", "title", "stock")
        .order_by("stock", "title")
    )
    if limit:
        qs = qs[:limit]
    return list(qs)


def low_stock_count() -> int:
    return Book.objects.filter(
        status=Book.Status.PUBLISHED,
        stock__lte=low_stock_threshold(),
    ).count()
