# catalog/views.py

"""
GET /api/admin/books/low-stock/?limit=

Dashboard alert: published books at or below the low-stock threshold,
lowest stock first.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.serializers import LowStockBookSerializer
from catalog.services.stock_alerts import low_stock_books, low_stock_count, low_stock_threshold


class LowStockBooksView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        parameters=[OpenApiParameter("limit", int)],
        responses={200: OpenApiResponse(description="{threshold, count, books: [...]}")},
        tags=["Admin"],
    )
    def get(self, request):
        raw = (request.query_params.get("limit") or "").strip()
        limit = int(raw) if raw.isdigit() and int(raw) > 0 else None

        books = low_stock_books(limit=limit)
        return Response(
            {
                "threshold": low_stock_threshold(),
                "count": low_stock_count(),
                "books": LowStockBookSerializer(books, many=True).data,
            },
            status=status.HTTP_200_OK,
        )
