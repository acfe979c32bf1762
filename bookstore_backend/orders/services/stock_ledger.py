# orders/services/stock_ledger.py

"""
STOCK LEDGER

Purpose:
- Resolve cart lines to catalog rows.
- Check availability for every line before anything is written.
- Decrement stock at order commit without ever going below zero.

Hard rules:
- Must run inside the order's transaction.atomic block.
- Rows are locked with select_for_update in primary-key order, so two orders
  touching the same books always lock them in the same sequence.
- The decrement is a conditional UPDATE (stock >= qty in the WHERE clause).
  An affected-row count of 0 means another writer got there first; we re-read
  and raise InsufficientStockError. A DB check constraint backs this up.
- Duplicate lines for the same book are summed before checking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db.models import F
from django.utils import timezone

from catalog.models import Book
from catalog.services.lookup import BookRef, resolve_book
from orders.services.exceptions import InsufficientStockError, ItemNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockLine:
    ref: BookRef
    quantity: int


@dataclass(frozen=True)
class ResolvedLine:
    ref: BookRef
    book: Book
    quantity: int


@dataclass(frozen=True)
class DecrementedItem:
    book_id: object
    title: str
    quantity: int
    stock_after: int


def resolve_lines(lines) -> list[ResolvedLine]:
    """
    Accepts StockLine or ResolvedLine values; order is preserved.
    """
    resolved = []
    for line in lines:
        if isinstance(line, ResolvedLine):
            resolved.append(line)
            continue

        book = resolve_book(line.ref)
        if book is None:
            raise ItemNotFoundError(line.ref)
        resolved.append(ResolvedLine(ref=line.ref, book=book, quantity=int(line.quantity)))
    return resolved


def _requested_per_book(resolved: list[ResolvedLine]) -> dict:
    totals: dict = {}
    for line in resolved:
        book, qty = totals.get(line.book.pk, (line.book, 0))
        totals[line.book.pk] = (book, qty + line.quantity)
    return totals


def _lock_books(pks) -> dict:
    qs = Book.objects.select_for_update().filter(pk__in=list(pks)).order_by("pk")
    return {book.pk: book for book in qs}


def _current_stock(pk) -> int:
    stock = Book.objects.filter(pk=pk).values_list("stock", flat=True).first()
    return int(stock or 0)


def check_availability(lines) -> list[ResolvedLine]:
    """Read-only: raise on the first shortfall, write nothing."""
    resolved = resolve_lines(lines)
    for book, requested in _requested_per_book(resolved).values():
        if requested > book.stock:
            raise InsufficientStockError(
                title=book.title,
                requested=requested,
                available=book.stock,
                book_id=book.pk,
            )
    return resolved


def reserve_and_decrement(lines) -> list[DecrementedItem]:
    resolved = resolve_lines(lines)
    requested = _requested_per_book(resolved)
    locked = _lock_books(requested.keys())

    # check every line first, so a shortfall never leaves a partial decrement
    for pk, (book, qty) in requested.items():
        current = locked.get(pk)
        if current is None:
            raise ItemNotFoundError(book.slug or pk)
        if qty > current.stock:
            raise InsufficientStockError(
                title=current.title,
                requested=qty,
                available=current.stock,
                book_id=pk,
            )

    now = timezone.now()
    out = []
    for pk in sorted(requested.keys(), key=str):
        book, qty = requested[pk]

        updated = Book.objects.filter(pk=pk, stock__gte=qty).update(
            stock=F("stock") - qty,
            updated_at=now,
        )
        if updated != 1:
            available = _current_stock(pk)
            logger.warning(
                "Stock decrement lost a race",
                extra={"book_id": str(pk), "requested": qty, "available": available},
            )
            raise InsufficientStockError(
                title=book.title,
                requested=qty,
                available=available,
                book_id=pk,
            )

        out.append(
            DecrementedItem(
                book_id=pk,
                title=book.title,
                quantity=qty,
                stock_after=_current_stock(pk),
            )
        )

    return out
