# discounts/views/apply.py

"""
CHECKOUT DISCOUNT PREVIEW

POST /api/discount-codes/apply/

Preview only: nothing is reserved. The order placement re-validates the
code at commit time.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from discounts.serializers import AppliedDiscountSerializer, ApplyDiscountSerializer
from discounts.services.discount_ledger import preview_discount
from orders.views.errors import PublicWriteThrottle, error_response


class ApplyDiscountView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        request=ApplyDiscountSerializer,
        responses={
            200: AppliedDiscountSerializer,
            400: OpenApiResponse(description="Code rejected (inactive, expired, below minimum...)"),
            429: OpenApiResponse(description="Rate limited"),
        },
        tags=["Public"],
    )
    def post(self, request):
        s = ApplyDiscountSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        result = preview_discount(data["code"], data["subtotal"], phone=data.get("phone") or None)
        if not result.ok:
            return error_response(result.error)

        return Response(AppliedDiscountSerializer(result.value).data, status=status.HTTP_200_OK)
