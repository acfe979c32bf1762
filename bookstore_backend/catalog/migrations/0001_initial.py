"""
======================================================
PATH: catalog/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Book

Purpose:
- Catalog rows consumed by the order engine (price + stock snapshot source).
- stock/price non-negative check constraints.
"""

from __future__ import annotations

import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Book",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        primary_key=True,
                        default=uuid.uuid4,
                        editable=False,
                        serialize=False,
                    ),
                ),
                ("title", models.CharField(max_length=180)),
                (
                    "slug",
                    models.SlugField(max_length=200, unique=True, allow_unicode=True),
                ),
                ("author", models.CharField(max_length=140, blank=True, default="")),
                ("price", models.DecimalField(max_digits=12, decimal_places=3)),
                ("stock", models.PositiveIntegerField(default=0)),
                ("low_stock_threshold", models.PositiveIntegerField(default=10)),
                (
                    "status",
                    models.CharField(
                        max_length=16,
                        choices=[
                            ("draft", "Draft"),
                            ("published", "Published"),
                            ("archived", "Archived"),
                        ],
                        default="published",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["title"],
                "indexes": [
                    models.Index(
                        fields=["status", "stock"],
                        name="catalog_book_status_stock_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(stock__gte=0),
                        name="catalog_book_stock_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(price__gte=0),
                        name="catalog_book_price_non_negative",
                    ),
                ],
            },
        ),
    ]
