# orders/urls.py

"""
ORDER URLS

Mounted in backend/urls.py under /api/.
"""

from django.urls import path

from orders.views.admin import AdminOrderExportView, AdminOrderListView, AdminOrderUpdateView
from orders.views.public import (
    CustomerOrdersView,
    OrderCreateView,
    OrderDetailView,
    OrderTrackView,
)

app_name = "orders"

urlpatterns = [
    path("orders/", OrderCreateView.as_view(), name="order-create"),
    path("orders/track/", OrderTrackView.as_view(), name="order-track"),
    path("orders/customer/", CustomerOrdersView.as_view(), name="customer-orders"),
    path("orders/<str:order_code>/", OrderDetailView.as_view(), name="order-detail"),
    path("admin/orders/", AdminOrderListView.as_view(), name="admin-order-list"),
    path("admin/orders/export/", AdminOrderExportView.as_view(), name="admin-order-export"),
    path("admin/orders/<str:order_code>/", AdminOrderUpdateView.as_view(), name="admin-order-update"),
]
