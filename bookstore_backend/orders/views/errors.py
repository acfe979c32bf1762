# orders/views/errors.py

"""
Domain error -> HTTP response mapping, plus the public throttles.

    validation / discount / transition -> 400
    not found                          -> 404
    insufficient stock                 -> 409
    persistence                        -> 503
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from discounts.services.exceptions import DiscountError
from orders.services.exceptions import OrderServiceError


class PublicWriteThrottle(AnonRateThrottle):
    """
    Public write endpoints (place order, discount preview).
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_write'].
    """

    scope = "public_write"


class PublicPollThrottle(AnonRateThrottle):
    """
    Public polling endpoints (order tracking).
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_poll'].
    """

    scope = "public_poll"


ERROR_STATUS = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "invalid_transition": status.HTTP_400_BAD_REQUEST,
    "item_not_found": status.HTTP_404_NOT_FOUND,
    "order_not_found": status.HTTP_404_NOT_FOUND,
    "delivery_partner_not_found": status.HTTP_404_NOT_FOUND,
    "insufficient_stock": status.HTTP_409_CONFLICT,
    "persistence_error": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def http_status_for(error: OrderServiceError) -> int:
    if isinstance(error, DiscountError):
        return status.HTTP_400_BAD_REQUEST
    return ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST)


def error_response(error: OrderServiceError) -> Response:
    return Response({"error": error.to_dict()}, status=http_status_for(error))
