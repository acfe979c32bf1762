"""
======================================================
PATH: orders/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Order, OrderItem, OrderStatusEntry

Purpose:
- Order aggregate with server-authoritative money columns.
- Item snapshots (book FK nullable, SET_NULL).
- Append-only status timeline in its own table.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("delivery", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
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
                ("order_code", models.CharField(max_length=32, unique=True)),
                ("customer_name", models.CharField(max_length=140)),
                ("phone", models.CharField(max_length=20)),
                ("email", models.EmailField(max_length=254, blank=True, default="")),
                ("city", models.CharField(max_length=90)),
                ("address", models.CharField(max_length=240)),
                ("notes", models.CharField(max_length=280, blank=True, default="")),
                (
                    "subtotal",
                    models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000")),
                ),
                ("discount_code", models.CharField(max_length=32, blank=True, default="")),
                (
                    "discount_amount",
                    models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000")),
                ),
                (
                    "delivery_fees",
                    models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000")),
                ),
                (
                    "total",
                    models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000")),
                ),
                (
                    "payment_method",
                    models.CharField(
                        max_length=32,
                        choices=[("cash_on_delivery", "Cash on delivery")],
                        default="cash_on_delivery",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        max_length=32,
                        choices=[
                            ("قيد المعالجة", "Processing"),
                            ("تم الإرسال", "Shipped"),
                            ("تم التسليم", "Delivered"),
                            ("تم الإلغاء", "Cancelled"),
                        ],
                        default="قيد المعالجة",
                    ),
                ),
                (
                    "delivery_partner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="delivery.deliverypartner",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("confirmed_at", models.DateTimeField(null=True, blank=True)),
                ("delivered_at", models.DateTimeField(null=True, blank=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["status", "created_at"],
                        name="orders_status_created_idx",
                    ),
                    models.Index(fields=["phone"], name="orders_phone_idx"),
                    models.Index(fields=["email"], name="orders_email_idx"),
                    models.Index(fields=["city"], name="orders_city_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(discount_amount__gte=0)
                        & models.Q(discount_amount__lte=models.F("subtotal")),
                        name="orders_discount_within_subtotal",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(delivery_fees__gte=0),
                        name="orders_delivery_fees_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(total__gte=0),
                        name="orders_total_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=180)),
                ("price", models.DecimalField(max_digits=12, decimal_places=3)),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
                (
                    "book",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_items",
                        to="catalog.book",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=["order", "position"],
                        name="orders_item_order_position_uniq",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(quantity__gte=1),
                        name="orders_item_quantity_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderStatusEntry",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "status",
                    models.CharField(
                        max_length=32,
                        choices=[
                            ("قيد المعالجة", "Processing"),
                            ("تم الإرسال", "Shipped"),
                            ("تم التسليم", "Delivered"),
                            ("تم الإلغاء", "Cancelled"),
                        ],
                    ),
                ),
                ("note", models.CharField(max_length=500, blank=True, default="")),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("sequence", models.PositiveIntegerField()),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="orders.order",
                    ),
                ),
                (
                    "updated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_status_updates",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["sequence"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=["order", "sequence"],
                        name="orders_status_entry_seq_uniq",
                    ),
                ],
            },
        ),
    ]
