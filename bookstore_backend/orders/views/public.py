# orders/views/public.py

"""
PUBLIC ORDER ENDPOINTS (STOREFRONT)

- POST /api/orders/              place order (cash on delivery)
- POST /api/orders/track/        by orderCode or phone
- GET  /api/orders/<code>/       order detail (tracking page)
- GET  /api/orders/customer/     signed-in customer's own orders

Security hardening:
- Throttle public_write on placement, public_poll on tracking.
- Customer listing is keyed by the signed-in user's email only; the client
  cannot ask for someone else's orders.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import OrderInputSerializer, OrderSerializer, TrackOrderSerializer
from orders.services.exceptions import OrderNotFoundError
from orders.services.order_placement import place_order
from orders.services.order_queries import get_order_by_code, get_orders_for_customer
from orders.views.errors import PublicPollThrottle, PublicWriteThrottle, error_response


class OrderCreateView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        request=OrderInputSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="Validation or discount error"),
            404: OpenApiResponse(description="Book not found"),
            409: OpenApiResponse(description="Insufficient stock"),
            429: OpenApiResponse(description="Rate limited"),
            503: OpenApiResponse(description="Storage failure; nothing saved"),
        },
        description="Place a cash-on-delivery order. Totals are computed server-side.",
        tags=["Orders"],
    )
    def post(self, request):
        result = place_order(request.data)
        if not result.ok:
            return error_response(result.error)
        return Response(OrderSerializer(result.value).data, status=status.HTTP_201_CREATED)


class OrderTrackView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [PublicPollThrottle]

    @extend_schema(
        request=TrackOrderSerializer,
        responses={
            200: OpenApiResponse(description="{orders: [...], mode: code|phone}"),
            404: OpenApiResponse(description="No matching order"),
        },
        tags=["Orders"],
    )
    def post(self, request):
        s = TrackOrderSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        code = (data.get("order_code") or "").strip()
        if code:
            order = get_order_by_code(code)
            if order is None:
                return error_response(OrderNotFoundError(code))
            orders, mode = [order], "code"
        else:
            phone = (data.get("phone") or "").strip()
            orders, mode = get_orders_for_customer(phone=phone), "phone"
            if not orders:
                return error_response(OrderNotFoundError(phone))

        return Response(
            {"orders": OrderSerializer(orders, many=True).data, "mode": mode},
            status=status.HTTP_200_OK,
        )


class OrderDetailView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]

    @extend_schema(
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Order not found")},
        tags=["Orders"],
    )
    def get(self, request, order_code):
        order = get_order_by_code(order_code)
        if order is None:
            return error_response(OrderNotFoundError(order_code))
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


class CustomerOrdersView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: OrderSerializer(many=True)}, tags=["Orders"])
    def get(self, request):
        orders = get_orders_for_customer(email=getattr(request.user, "email", None))
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)
