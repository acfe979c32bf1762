# orders/filters.py

"""
Admin order listing filters (DjangoFilterBackend + list_orders()).

Query params:
- status        exact stored value or English alias (processing, shipped, ...)
- city          case-insensitive exact
- phone         exact (trimmed)
- email         case-insensitive exact
- partner       delivery partner id
- created_from  / created_to   inclusive date bounds
- q             order code contains (case-insensitive)
"""

from __future__ import annotations

import django_filters
from django.db.models import Q

from orders.models import Order
from orders.services.order_lifecycle import STATUS_ALIASES


class OrderFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(method="filter_status")
    city = django_filters.CharFilter(field_name="city", lookup_expr="iexact")
    phone = django_filters.CharFilter(method="filter_phone")
    email = django_filters.CharFilter(field_name="email", lookup_expr="iexact")
    partner = django_filters.UUIDFilter(field_name="delivery_partner_id")
    created_from = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    created_to = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    q = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Order
        fields = ["status", "city", "phone", "email", "partner", "created_from", "created_to", "q"]

    def filter_status(self, queryset, name, value):
        text = (value or "").strip()
        alias = STATUS_ALIASES.get(text.lower())
        return queryset.filter(status=alias.value if alias else text)

    def filter_phone(self, queryset, name, value):
        return queryset.filter(phone=(value or "").strip())

    def filter_search(self, queryset, name, value):
        text = (value or "").strip()
        if not text:
            return queryset
        return queryset.filter(Q(order_code__icontains=text) | Q(customer_name__icontains=text))
