# discounts/serializers.py

from decimal import Decimal

from rest_framework import serializers

from discounts.models import DiscountCode
from orders.services.money import money_str


class DiscountCodeSerializer(serializers.ModelSerializer):
    """
    Admin CRUD serializer.

    Rules:
    - code is upper-cased and must stay unique case-insensitively
    - percentage value <= 100
    - end_date >= start_date
    - usage_count is read-only (only the discount ledger moves it)
    """

    class Meta:
        model = DiscountCode
        fields = [
            "id",
            "code",
            "description",
            "type",
            "value",
            "min_order_total",
            "max_discount_amount",
            "start_date",
            "end_date",
            "usage_limit",
            "usage_count",
            "per_user_limit",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "usage_count", "created_at", "updated_at"]

    def validate_code(self, value: str):
        code = DiscountCode.normalize_code(value)
        qs = DiscountCode.objects.filter(code=code)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A discount code with this code already exists.")
        return code

    def validate(self, attrs):
        def current(name):
            if name in attrs:
                return attrs[name]
            return getattr(self.instance, name, None)

        kind = current("type") or DiscountCode.TYPE_PERCENTAGE
        value = current("value")
        if value is not None and kind == DiscountCode.TYPE_PERCENTAGE and Decimal(value) > Decimal("100"):
            raise serializers.ValidationError({"value": "Percentage discount cannot exceed 100."})

        start, end = current("start_date"), current("end_date")
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date must be after start date."})

        usage_limit = current("usage_limit")
        if (
            self.instance is not None
            and usage_limit is not None
            and usage_limit < self.instance.usage_count
        ):
            raise serializers.ValidationError(
                {"usage_limit": "Usage limit cannot be lower than the current usage count."}
            )
        return attrs


class ApplyDiscountSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=32)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=Decimal("0"))
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)


class AppliedDiscountSerializer(serializers.Serializer):
    code = serializers.CharField()
    type = serializers.CharField(source="discount.type")
    value = serializers.DecimalField(source="discount.value", max_digits=12, decimal_places=3)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=3)
    discountAmount = serializers.DecimalField(source="amount", max_digits=12, decimal_places=3)
    subtotalAfterDiscount = serializers.SerializerMethodField()

    def get_subtotalAfterDiscount(self, obj):
        return money_str(max(Decimal("0"), obj.subtotal - obj.amount))
