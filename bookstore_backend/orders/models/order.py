# orders/models/order.py

import uuid
from decimal import Decimal

from django.db import models

from orders.services.money import money


class Order(models.Model):
    """
    Customer order (cash on delivery, guest checkout).

    Key rules:
    - `order_code` is the public identifier; `id` never leaves the backend.
    - Money fields are server authoritative. `total` is recomputed on every
      save from subtotal, discount and delivery fees.
    - `status` only moves through orders.services.order_lifecycle; every move
      appends one OrderStatusEntry.
    """

    class Status(models.TextChoices):
        PROCESSING = "قيد المعالجة", "Processing"
        SHIPPED = "تم الإرسال", "Shipped"
        DELIVERED = "تم التسليم", "Delivered"
        CANCELLED = "تم الإلغاء", "Cancelled"

    PAYMENT_COD = "cash_on_delivery"

    PAYMENT_CHOICES = [
        (PAYMENT_COD, "Cash on delivery"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_code = models.CharField(max_length=32, unique=True)

    # Customer
    customer_name = models.CharField(max_length=140)
    phone = models.CharField(max_length=20)
    email = models.EmailField(blank=True, default="")
    city = models.CharField(max_length=90)
    address = models.CharField(max_length=240)
    notes = models.CharField(max_length=280, blank=True, default="")

    # Money (3 decimal places, major units)
    subtotal = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000"))
    discount_code = models.CharField(max_length=32, blank=True, default="")
    discount_amount = models.DecimalField(
        max_digits=12, decimal_places=3, default=Decimal("0.000")
    )
    delivery_fees = models.DecimalField(
        max_digits=12, decimal_places=3, default=Decimal("0.000")
    )
    total = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000"))

    payment_method = models.CharField(
        max_length=32,
        choices=PAYMENT_CHOICES,
        default=PAYMENT_COD,
    )

    status = models.CharField(
        max_length=32,
        choices=Status.choices,
        default=Status.PROCESSING,
    )

    delivery_partner = models.ForeignKey(
        "delivery.DeliveryPartner",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
            models.Index(fields=["phone"], name="orders_phone_idx"),
            models.Index(fields=["email"], name="orders_email_idx"),
            models.Index(fields=["city"], name="orders_city_idx"),
        ]
        constraints = [
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
        ]

    def __str__(self):
        return f"{self.order_code} | {self.total} | {self.status}"

    @property
    def is_terminal(self) -> bool:
        return self.status in (self.Status.DELIVERED, self.Status.CANCELLED)

    def recompute_total(self) -> Decimal:
        subtotal = Decimal(str(self.subtotal or 0))
        discount = Decimal(str(self.discount_amount or 0))
        fees = Decimal(str(self.delivery_fees or 0))

        total = max(Decimal("0"), subtotal - discount) + fees
        self.total = money(total)
        return self.total

    def save(self, *args, **kwargs):
        self.email = (self.email or "").strip().lower()
        self.recompute_total()

        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "total" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["total"]

        super().save(*args, **kwargs)
