# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderItem, OrderStatusEntry


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("position", "book", "title", "price", "quantity")

    def has_add_permission(self, request, obj=None):
        return False


class OrderStatusEntryInline(admin.TabularInline):
    model = OrderStatusEntry
    extra = 0
    can_delete = False
    readonly_fields = ("sequence", "status", "note", "updated_by", "updated_at")

    def has_add_permission(self, request, obj=None):
        return False


# ======================================================
# ORDER ADMIN
# ======================================================
# Status changes go through the API (state machine + history);
# the admin is read-mostly.


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_code",
        "customer_name",
        "phone",
        "city",
        "status",
        "total",
        "created_at",
    )
    readonly_fields = (
        "order_code",
        "subtotal",
        "discount_code",
        "discount_amount",
        "delivery_fees",
        "total",
        "status",
        "payment_method",
        "created_at",
        "updated_at",
        "confirmed_at",
        "delivered_at",
    )
    search_fields = ("order_code", "customer_name", "phone", "email")
    list_filter = ("status", "city", "created_at")
    inlines = [OrderItemInline, OrderStatusEntryInline]
