"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions
for Order entities.

DESIGN PRINCIPLES:
- No database writes
- No stock mutation
- No side effects
- Single source of truth
"""

from __future__ import annotations

from orders.models import Order
from orders.services.exceptions import InvalidTransitionError

Status = Order.Status

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Status.DELIVERED,
    Status.CANCELLED,
}

# processing -> processing is a re-confirmation (stamps confirmed_at)
ALLOWED_TRANSITIONS = {
    Status.PROCESSING: {
        Status.PROCESSING,
        Status.SHIPPED,
        Status.CANCELLED,
    },
    Status.SHIPPED: {
        Status.DELIVERED,
        Status.CANCELLED,
    },
}

NOTE_REQUIRED = {
    (Status.SHIPPED, Status.CANCELLED),
}

STATUS_ALIASES = {
    "processing": Status.PROCESSING,
    "shipped": Status.SHIPPED,
    "delivered": Status.DELIVERED,
    "cancelled": Status.CANCELLED,
    "canceled": Status.CANCELLED,
}


# ============================================================
# DOMAIN RULES
# ============================================================


def normalize_status(value, *, from_status: str = "") -> str:
    """
    Accepts the stored (Arabic) value or its English alias.
    """
    text = str(value or "").strip()
    if text in Status.values:
        return text

    alias = STATUS_ALIASES.get(text.lower())
    if alias is None:
        raise InvalidTransitionError(
            from_status=from_status,
            to_status=text,
            reason="unknown status",
        )
    return alias.value


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str, note: str | None = None):
    if order.status in TERMINAL_STATES:
        raise InvalidTransitionError(
            from_status=order.status,
            to_status=target_status,
            reason="order is in a terminal state",
        )

    if not can_transition(from_status=order.status, to_status=target_status):
        raise InvalidTransitionError(
            from_status=order.status,
            to_status=target_status,
        )

    if (order.status, target_status) in NOTE_REQUIRED and not (note or "").strip():
        raise InvalidTransitionError(
            from_status=order.status,
            to_status=target_status,
            reason="a note is required",
        )
