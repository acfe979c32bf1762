# orders/serializers.py

"""
ORDER SERIALIZERS (TRANSPORT LAYER)

Wire format is camelCase (storefront contract); model fields are
snake_case and mapped with `source=`.

Input serializers validate shape only. Prices, titles and totals are
computed server-side; the client's `price`/`title` per line are accepted
so old carts keep working, but never used for money.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from catalog.services.lookup import BookRef
from delivery.models import DeliveryPartner
from orders.models import Order, OrderItem, OrderStatusEntry
from orders.services.money import money_str

PHONE_REGEX = r"^[0-9+\-\s]{6,20}$"


# ============================================================
# INPUT
# ============================================================


class OrderItemInputSerializer(serializers.Serializer):
    # exactly one of book / bookId / slug
    book = serializers.CharField(required=False, max_length=200)
    bookId = serializers.UUIDField(required=False, source="book_id")
    slug = serializers.CharField(required=False, max_length=200)

    title = serializers.CharField(required=False, allow_blank=True, max_length=180)
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=3,
        required=False,
        allow_null=True,
        min_value=Decimal("0"),
    )
    quantity = serializers.IntegerField(min_value=1)

    def validate(self, attrs):
        given = [k for k in ("book", "book_id", "slug") if attrs.get(k)]
        if len(given) != 1:
            raise serializers.ValidationError(
                {"book": ["Provide exactly one of book, bookId or slug."]}
            )

        if attrs.get("book_id"):
            attrs["ref"] = BookRef.by_id(attrs["book_id"])
        elif attrs.get("slug"):
            attrs["ref"] = BookRef.by_slug(attrs["slug"])
        else:
            attrs["ref"] = BookRef.parse(attrs["book"])
        return attrs


class OrderInputSerializer(serializers.Serializer):
    customerName = serializers.CharField(source="customer_name", min_length=3, max_length=140)
    phone = serializers.RegexField(PHONE_REGEX, max_length=20)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True, default="")
    city = serializers.CharField(min_length=2, max_length=90)
    address = serializers.CharField(min_length=8, max_length=240)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=280, default="")

    items = OrderItemInputSerializer(many=True, allow_empty=False)

    deliveryFees = serializers.DecimalField(
        source="delivery_fees",
        max_digits=12,
        decimal_places=3,
        required=False,
        allow_null=True,
        min_value=Decimal("0"),
    )
    deliveryPartner = serializers.CharField(
        source="delivery_partner",
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=64,
    )
    discountCode = serializers.CharField(
        source="discount_code",
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=32,
    )

    def validate_email(self, value):
        return (value or "").strip().lower()

    def validate_notes(self, value):
        return (value or "").strip()


class TrackOrderSerializer(serializers.Serializer):
    orderCode = serializers.CharField(source="order_code", required=False, allow_blank=True, max_length=32)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)

    def validate(self, attrs):
        if not attrs.get("order_code") and not attrs.get("phone"):
            raise serializers.ValidationError("Provide an order code or a phone number.")
        return attrs


class OrderAdminUpdateSerializer(serializers.Serializer):
    """
    PATCH body: either a status change ({status, note?}) or a partner
    assignment ({deliveryPartnerId}, null to unassign).
    """

    status = serializers.CharField(required=False, max_length=32)
    note = serializers.CharField(required=False, allow_blank=True, max_length=500, default="")
    deliveryPartnerId = serializers.UUIDField(source="delivery_partner_id", required=False, allow_null=True)

    def validate(self, attrs):
        if not attrs.get("status") and "delivery_partner_id" not in attrs:
            raise serializers.ValidationError("Provide a status or a deliveryPartnerId.")
        return attrs


# ============================================================
# OUTPUT
# ============================================================


class OrderItemSerializer(serializers.ModelSerializer):
    book = serializers.SerializerMethodField()
    lineTotal = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ["book", "title", "price", "quantity", "lineTotal"]
        read_only_fields = fields

    def get_book(self, obj):
        # deleted catalog rows read as null
        return str(obj.book_id) if obj.book_id else None

    def get_lineTotal(self, obj):
        return money_str(obj.line_total)


class OrderStatusEntrySerializer(serializers.ModelSerializer):
    updatedBy = serializers.SerializerMethodField()
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = OrderStatusEntry
        fields = ["status", "note", "updatedBy", "updatedAt"]
        read_only_fields = fields

    def get_updatedBy(self, obj):
        user = obj.updated_by
        return user.get_username() if user is not None else None


class DeliveryPartnerSummarySerializer(serializers.ModelSerializer):
    contactName = serializers.CharField(source="contact_name", read_only=True)
    contactPhone = serializers.CharField(source="contact_phone", read_only=True)

    class Meta:
        model = DeliveryPartner
        fields = ["id", "name", "contactName", "contactPhone"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    orderCode = serializers.CharField(source="order_code", read_only=True)
    customerName = serializers.CharField(source="customer_name", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    discountCode = serializers.CharField(source="discount_code", read_only=True)
    discountAmount = serializers.DecimalField(
        source="discount_amount", max_digits=12, decimal_places=3, read_only=True
    )
    deliveryFees = serializers.DecimalField(
        source="delivery_fees", max_digits=12, decimal_places=3, read_only=True
    )
    statusHistory = OrderStatusEntrySerializer(source="status_history", many=True, read_only=True)
    deliveryPartner = DeliveryPartnerSummarySerializer(source="delivery_partner", read_only=True)
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    confirmedAt = serializers.DateTimeField(source="confirmed_at", read_only=True)
    deliveredAt = serializers.DateTimeField(source="delivered_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "orderCode",
            "customerName",
            "phone",
            "email",
            "city",
            "address",
            "notes",
            "items",
            "subtotal",
            "discountCode",
            "discountAmount",
            "deliveryFees",
            "total",
            "status",
            "statusHistory",
            "deliveryPartner",
            "paymentMethod",
            "createdAt",
            "updatedAt",
            "confirmedAt",
            "deliveredAt",
        ]
        read_only_fields = fields
