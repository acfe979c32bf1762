"""
======================================================
PATH: delivery/migrations/0001_initial.py
======================================================
MIGRATION: CREATE DeliveryPartner
"""

from __future__ import annotations

import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DeliveryPartner",
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
                ("name", models.CharField(max_length=120)),
                ("contact_name", models.CharField(max_length=100, blank=True, default="")),
                ("contact_phone", models.CharField(max_length=40, blank=True, default="")),
                (
                    "contact_email",
                    models.EmailField(max_length=120, blank=True, default=""),
                ),
                ("coverage_zones", models.JSONField(default=list, blank=True)),
                (
                    "delivery_fees",
                    models.DecimalField(
                        max_digits=12,
                        decimal_places=3,
                        null=True,
                        blank=True,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        fields=["is_active"],
                        name="delivery_partner_active_idx",
                    ),
                ],
            },
        ),
    ]
