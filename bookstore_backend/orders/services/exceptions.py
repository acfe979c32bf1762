# orders/services/exceptions.py

"""
ORDER SERVICE ERRORS

Centralized domain errors for the order engine.

Every error carries:
- `code`: stable machine-readable kind (callers branch on it)
- `message`: human text
- `detail`: structured context the UI needs to explain the failure
  (which item, how much stock, which rule)
"""

from __future__ import annotations


class OrderServiceError(Exception):
    """Base exception for all order engine failures."""

    code = "order_error"
    default_message = "Order operation failed."

    def __init__(self, message: str | None = None, **detail):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, **self.detail}


class OrderValidationError(OrderServiceError):
    """Malformed payload. Never retried automatically."""

    code = "validation_error"
    default_message = "Invalid order payload."

    def __init__(self, errors, message: str | None = None):
        self.errors = errors
        super().__init__(message, errors=errors)


class ItemNotFoundError(OrderServiceError):
    code = "item_not_found"

    def __init__(self, reference):
        self.reference = str(reference)
        super().__init__(f"Book not found: {self.reference}", reference=self.reference)


class InsufficientStockError(OrderServiceError):
    code = "insufficient_stock"

    def __init__(self, *, title: str, requested: int, available: int, book_id=None):
        self.title = title
        self.requested = int(requested)
        self.available = max(0, int(available))
        super().__init__(
            f"Insufficient stock for {title}. "
            f"Requested: {self.requested}, Available: {self.available}",
            title=title,
            requested=self.requested,
            available=self.available,
            book_id=str(book_id) if book_id else None,
        )


class InvalidTransitionError(OrderServiceError):
    """Status change violates the order state machine."""

    code = "invalid_transition"

    def __init__(self, *, from_status: str, to_status: str, reason: str = ""):
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        message = f"Order cannot transition from '{from_status}' to '{to_status}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            from_status=from_status,
            to_status=to_status,
            reason=reason,
        )


class OrderNotFoundError(OrderServiceError):
    code = "order_not_found"

    def __init__(self, order_code: str):
        self.order_code = order_code
        super().__init__(f"Order not found: {order_code}", order_code=order_code)


class PersistenceError(OrderServiceError):
    """
    Storage failed during the step. The whole step rolled back.

    Only reads are safe to retry; order creation is not (retryable=False)
    unless the caller has its own dedupe key.
    """

    code = "persistence_error"
    default_message = "Storage failure; nothing was saved."

    def __init__(self, message: str | None = None, *, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message, retryable=retryable)


class DeliveryPartnerNotFoundError(OrderServiceError):
    """Unknown or inactive partner on an explicit assignment."""

    code = "delivery_partner_not_found"

    def __init__(self, partner_id):
        self.partner_id = str(partner_id)
        super().__init__(
            f"Delivery partner not found or inactive: {self.partner_id}",
            partner_id=self.partner_id,
        )
