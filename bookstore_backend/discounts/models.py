# discounts/models.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, RegexValidator
from django.db import models

code_validator = RegexValidator(
    regex=r"^[A-Za-z0-9_-]{3,32}$",
    message="Code must be 3-32 characters: letters, digits, '-' or '_'.",
)


class DiscountCode(models.Model):
    """
    Checkout discount code.

    Key rules:
    - `code` is stored upper-cased; lookups are case-insensitive.
    - `usage_count` only ever grows, and only through the discount ledger's
      conditional UPDATE at order commit (no refund reversal flow).
    - `per_user_limit` is enforced per customer phone number
      (guest checkout has no stable account identity).
    """

    TYPE_PERCENTAGE = "percentage"
    TYPE_FIXED = "fixed"

    TYPE_CHOICES = [
        (TYPE_PERCENTAGE, "Percentage"),
        (TYPE_FIXED, "Fixed amount"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=32, unique=True, validators=[code_validator])
    description = models.CharField(max_length=200, blank=True, default="")

    type = models.CharField(max_length=16, choices=TYPE_CHOICES, default=TYPE_PERCENTAGE)
    value = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        validators=[MinValueValidator(Decimal("0.001"))],
    )

    min_order_total = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal("0.000"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    max_discount_amount = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Caps a percentage discount in absolute currency.",
    )

    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)

    usage_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
    )
    usage_count = models.PositiveIntegerField(default=0)
    per_user_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["is_active", "start_date", "end_date"],
                name="discount_active_window_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(usage_limit__isnull=True)
                | models.Q(usage_count__lte=models.F("usage_limit")),
                name="discount_usage_within_limit",
            ),
        ]

    def __str__(self):
        return f"{self.code} ({self.type} {self.value})"

    @staticmethod
    def normalize_code(code) -> str:
        return str(code or "").strip().upper()

    def clean(self):
        self.code = self.normalize_code(self.code)

        if self.value is None or Decimal(self.value) <= 0:
            raise ValidationError({"value": "Discount value must be greater than zero."})

        if self.type == self.TYPE_PERCENTAGE and Decimal(self.value) > Decimal("100"):
            raise ValidationError({"value": "Percentage discount cannot exceed 100."})

        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": "End date must be after start date."})

    def save(self, *args, **kwargs):
        self.code = self.normalize_code(self.code)
        super().save(*args, **kwargs)


class DiscountRedemption(models.Model):
    """
    One row per successful application of a code to an order.
    Append-only; the source of truth for per-customer limits.
    """

    id = models.BigAutoField(primary_key=True)

    discount_code = models.ForeignKey(
        DiscountCode,
        on_delete=models.CASCADE,
        related_name="redemptions",
    )
    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="discount_redemption",
    )

    phone = models.CharField(max_length=40, db_index=True)
    email = models.EmailField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(
                fields=["discount_code", "phone"],
                name="discount_redeem_code_phone_idx",
            ),
        ]

    def __str__(self):
        return f"{self.discount_code.code} -> {self.order_id}"
