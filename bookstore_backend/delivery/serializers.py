# delivery/serializers.py

from rest_framework import serializers

from delivery.models import DeliveryPartner


class PublicDeliveryPartnerSerializer(serializers.ModelSerializer):
    """Checkout dropdown: active partners and their fees only."""

    deliveryFees = serializers.DecimalField(
        source="delivery_fees",
        max_digits=12,
        decimal_places=3,
        allow_null=True,
        read_only=True,
    )
    coverageZones = serializers.JSONField(source="coverage_zones", read_only=True)

    class Meta:
        model = DeliveryPartner
        fields = ["id", "name", "deliveryFees", "coverageZones"]
        read_only_fields = fields
