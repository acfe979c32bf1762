# orders/apps.py

"""
ORDERS APP CONFIG

The order engine: placement, stock decrement, status lifecycle, queries.
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Orders"
