# discounts/admin.py

from django.contrib import admin

from discounts.models import DiscountCode, DiscountRedemption


@admin.register(DiscountCode)
class DiscountCodeAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "type",
        "value",
        "usage_count",
        "usage_limit",
        "is_active",
        "start_date",
        "end_date",
    )
    readonly_fields = ("usage_count", "created_at", "updated_at")
    search_fields = ("code", "description")
    list_filter = ("type", "is_active")


@admin.register(DiscountRedemption)
class DiscountRedemptionAdmin(admin.ModelAdmin):
    list_display = ("discount_code", "order", "phone", "created_at")
    readonly_fields = ("discount_code", "order", "phone", "email", "created_at")
    search_fields = ("discount_code__code", "phone", "order__order_code")

    def has_add_permission(self, request):
        return False
