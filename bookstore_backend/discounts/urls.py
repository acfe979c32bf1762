# discounts/urls.py

"""
DISCOUNT URLS

Mounted in backend/urls.py under /api/:
- POST /api/discount-codes/apply/
- /api/admin/discount-codes/         (staff CRUD)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from discounts.views.admin import DiscountCodeAdminViewSet
from discounts.views.apply import ApplyDiscountView

router = DefaultRouter()
router.register(r"admin/discount-codes", DiscountCodeAdminViewSet, basename="admin-discount-codes")

urlpatterns = [
    path("discount-codes/apply/", ApplyDiscountView.as_view(), name="discount-apply"),
    path("", include(router.urls)),
]
