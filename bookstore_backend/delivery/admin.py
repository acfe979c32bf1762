# delivery/admin.py

from django.contrib import admin

from delivery.models import DeliveryPartner


@admin.register(DeliveryPartner)
class DeliveryPartnerAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_name", "contact_phone", "delivery_fees", "is_active")
    search_fields = ("name", "contact_name", "contact_phone")
    list_filter = ("is_active",)
