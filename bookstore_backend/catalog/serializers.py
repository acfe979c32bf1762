# catalog/serializers.py

from rest_framework import serializers

from catalog.models import Book
from catalog.services.stock_alerts import stock_status


class LowStockBookSerializer(serializers.ModelSerializer):
    stockStatus = serializers.SerializerMethodField()

    class Meta:
        model = Book
        fields = ["id", "slug", "title", "stock", "stockStatus"]
        read_only_fields = fields

    def get_stockStatus(self, obj):
        return stock_status(obj)
