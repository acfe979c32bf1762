# catalog/models/book.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Book(models.Model):
    """
    A sellable catalog item.

    STOCK MODEL (IMPORTANT):
    - `stock` is the on-hand quantity for the single warehouse.
    - Only the order engine's stock ledger decrements it, through a
      conditional UPDATE (never read-modify-write in Python).
    - A DB check constraint keeps it >= 0 even if a writer misbehaves.

    Orders snapshot `title` and `price` at order time, so editing a book
    never rewrites historical orders.
    """

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"
        ARCHIVED = "archived", "Archived"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=180)
    slug = models.SlugField(max_length=200, unique=True, allow_unicode=True)
    author = models.CharField(max_length=140, blank=True, default="")

    # Decimal major units, 3 places (e.g. 19.900)
    price = models.DecimalField(max_digits=12, decimal_places=3)

    stock = models.PositiveIntegerField(default=0)
    low_stock_threshold = models.PositiveIntegerField(default=10)

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PUBLISHED,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["title"]
        indexes = [
            models.Index(fields=["status", "stock"], name="catalog_book_status_stock_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="catalog_book_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="catalog_book_price_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.slug})"

    def clean(self):
        if self.price is None or Decimal(self.price) < Decimal("0"):
            raise ValidationError("price must be >= 0")
