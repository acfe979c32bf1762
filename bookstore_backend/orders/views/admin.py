# orders/views/admin.py

"""
STAFF ORDER ENDPOINTS

- GET   /api/admin/orders/          list (OrderFilter params, ?limit=)
- GET   /api/admin/orders/export/   CSV (default), txt or JSON download
- PATCH /api/admin/orders/<code>/   {status, note?} or {deliveryPartnerId}

Filter values that cannot be parsed are a 400, never silently dropped.
"""

from __future__ import annotations

import logging

from django.http import HttpResponse
from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import OrderAdminUpdateSerializer, OrderSerializer
from orders.services.exceptions import OrderValidationError
from orders.services.order_export import export_filters, orders_for_export, write_orders_csv
from orders.services.order_placement import assign_delivery_partner, transition_order
from orders.services.order_queries import list_orders
from orders.views.errors import error_response

logger = logging.getLogger(__name__)

FILTER_PARAMETERS = [
    OpenApiParameter("status", str),
    OpenApiParameter("city", str),
    OpenApiParameter("phone", str),
    OpenApiParameter("email", str),
    OpenApiParameter("partner", str),
    OpenApiParameter("created_from", str, description="YYYY-MM-DD"),
    OpenApiParameter("created_to", str, description="YYYY-MM-DD"),
    OpenApiParameter("q", str, description="Order code / customer name search"),
]

EXPORT_CONTENT_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "txt": "text/plain; charset=utf-8",
}


class AdminOrderListView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        parameters=[*FILTER_PARAMETERS, OpenApiParameter("limit", int)],
        responses={
            200: OrderSerializer(many=True),
            400: OpenApiResponse(description="Unparseable filter value"),
        },
        tags=["Admin"],
    )
    def get(self, request):
        params = request.query_params.copy()
        limit = params.pop("limit", [None])[-1]
        try:
            orders = list_orders(filters=params, limit=limit)
        except OrderValidationError as exc:
            return error_response(exc)
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)


class AdminOrderExportView(APIView):
    """
    `output` picks the file type (csv, txt, json). It is not called `format`
    because DRF reserves that query param for renderer selection.
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        parameters=[
            *FILTER_PARAMETERS,
            OpenApiParameter("from", str, description="Alias of created_from"),
            OpenApiParameter("to", str, description="Alias of created_to"),
            OpenApiParameter("output", str, enum=["csv", "txt", "json"]),
        ],
        responses={
            200: OpenApiResponse(description="Attachment, newest order first"),
            400: OpenApiResponse(description="Unparseable filter or unknown output"),
        },
        tags=["Admin"],
    )
    def get(self, request):
        params = request.query_params.copy()
        output = (params.pop("output", ["csv"])[-1] or "csv").strip().lower()
        if output not in ("csv", "txt", "json"):
            return error_response(OrderValidationError({"output": ["Use csv, txt or json."]}))

        try:
            orders = orders_for_export(export_filters(params))
        except OrderValidationError as exc:
            return error_response(exc)

        filename = f"orders-{timezone.localdate():%Y-%m-%d}.{output}"

        if output == "json":
            response = Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)
        else:
            response = HttpResponse(content_type=EXPORT_CONTENT_TYPES[output])
            # BOM so spreadsheet apps read the Arabic statuses as UTF-8
            response.write("\ufeff")
            count = write_orders_csv(response, orders.iterator(chunk_size=500))
            logger.info(
                "Orders exported",
                extra={"rows": count, "output": output, "actor": request.user.pk},
            )

        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        response["Cache-Control"] = "no-store"
        return response


class AdminOrderUpdateView(APIView):
    permission_classes = [IsAdminUser]
    parser_classes = [JSONParser]

    @extend_schema(
        request=OrderAdminUpdateSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="Invalid transition"),
            404: OpenApiResponse(description="Order or partner not found"),
        },
        tags=["Admin"],
    )
    def patch(self, request, order_code):
        s = OrderAdminUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        if data.get("status"):
            result = transition_order(
                order_code,
                data["status"],
                note=data.get("note") or None,
                actor=request.user,
            )
        else:
            result = assign_delivery_partner(
                order_code,
                data.get("delivery_partner_id"),
                actor=request.user,
            )

        if not result.ok:
            return error_response(result.error)
        return Response(OrderSerializer(result.value).data, status=status.HTTP_200_OK)
