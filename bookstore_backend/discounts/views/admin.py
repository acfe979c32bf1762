# discounts/views/admin.py

from rest_framework import viewsets
from rest_framework.permissions import IsAdminUser

from discounts.models import DiscountCode
from discounts.serializers import DiscountCodeSerializer


class DiscountCodeAdminViewSet(viewsets.ModelViewSet):
    """
    Discount code administration (staff only).

    Filters: ?active=true|false, ?code=<prefix>
    """

    serializer_class = DiscountCodeSerializer
    permission_classes = [IsAdminUser]

    def get_queryset(self):
        qs = DiscountCode.objects.all().order_by("-created_at")

        active = (self.request.query_params.get("active") or "").strip().lower()
        if active in {"true", "1"}:
            qs = qs.filter(is_active=True)
        elif active in {"false", "0"}:
            qs = qs.filter(is_active=False)

        code = (self.request.query_params.get("code") or "").strip()
        if code:
            qs = qs.filter(code__startswith=DiscountCode.normalize_code(code))
        return qs
