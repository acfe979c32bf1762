"""
======================================================
PATH: discounts/migrations/0001_initial.py
======================================================
MIGRATION: CREATE DiscountCode, DiscountRedemption

Purpose:
- Discount codes with a DB-level usage_count <= usage_limit guard.
- Per-order redemption rows (per-customer limit source).
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DiscountCode",
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
                (
                    "code",
                    models.CharField(
                        max_length=32,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                regex="^[A-Za-z0-9_-]{3,32}$",
                                message="Code must be 3-32 characters: letters, digits, '-' or '_'.",
                            )
                        ],
                    ),
                ),
                ("description", models.CharField(max_length=200, blank=True, default="")),
                (
                    "type",
                    models.CharField(
                        max_length=16,
                        choices=[("percentage", "Percentage"), ("fixed", "Fixed amount")],
                        default="percentage",
                    ),
                ),
                (
                    "value",
                    models.DecimalField(
                        max_digits=12,
                        decimal_places=3,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.001"))],
                    ),
                ),
                (
                    "min_order_total",
                    models.DecimalField(
                        max_digits=12,
                        decimal_places=3,
                        default=Decimal("0.000"),
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "max_discount_amount",
                    models.DecimalField(
                        max_digits=12,
                        decimal_places=3,
                        null=True,
                        blank=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        help_text="Caps a percentage discount in absolute currency.",
                    ),
                ),
                ("start_date", models.DateTimeField(null=True, blank=True)),
                ("end_date", models.DateTimeField(null=True, blank=True)),
                (
                    "usage_limit",
                    models.PositiveIntegerField(
                        null=True,
                        blank=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("usage_count", models.PositiveIntegerField(default=0)),
                (
                    "per_user_limit",
                    models.PositiveIntegerField(
                        null=True,
                        blank=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["is_active", "start_date", "end_date"],
                        name="discount_active_window_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(usage_limit__isnull=True)
                        | models.Q(usage_count__lte=models.F("usage_limit")),
                        name="discount_usage_within_limit",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DiscountRedemption",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("phone", models.CharField(max_length=40, db_index=True)),
                ("email", models.EmailField(max_length=254, blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "discount_code",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="redemptions",
                        to="discounts.discountcode",
                    ),
                ),
                (
                    "order",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="discount_redemption",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(
                        fields=["discount_code", "phone"],
                        name="discount_redeem_code_phone_idx",
                    ),
                ],
            },
        ),
    ]
