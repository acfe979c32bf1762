# orders/tests/helpers.py

from decimal import Decimal

from catalog.models import Book


def make_book(title="Kalila wa Dimna", slug=None, price="10.250", stock=10, **extra):
    return Book.objects.create(
        title=title,
        slug=slug or title.lower().replace(" ", "-"),
        price=Decimal(price),
        stock=stock,
        **extra,
    )


def order_payload(items, **overrides):
    payload = {
        "customerName": "Amina Ben Salah",
        "phone": "+216 20 123 456",
        "email": "Amina@Example.com",
        "city": "Tunis",
        "address": "12 Rue de Marseille",
        "notes": "",
        "items": items,
    }
    payload.update(overrides)
    return payload


def line(book, quantity=1, **extra):
    return {"book": str(book.id), "quantity": quantity, **extra}
