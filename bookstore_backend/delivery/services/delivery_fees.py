# delivery/services/delivery_fees.py

"""
DELIVERY FEE RESOLVER

Three tiers, first match wins:
1) partner: an ACTIVE partner with a configured fee
2) caller:  the fee the checkout page submitted
3) default: settings.ORDERS["DEFAULT_DELIVERY_FEE"]

The checkout page pre-fetches partner data on load, so by submission time the
partner may be gone or deactivated. That is not an error: we fall through to
the next tier and log it.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.conf import settings

from delivery.models import DeliveryPartner
from orders.services.money import ZERO, money

logger = logging.getLogger(__name__)

SOURCE_PARTNER = "partner"
SOURCE_CALLER = "caller"
SOURCE_DEFAULT = "default"


@dataclass(frozen=True)
class DeliveryFee:
    amount: Decimal
    source: str
    partner: DeliveryPartner | None = None


def default_delivery_fee() -> Decimal:
    try:
        fee = money(settings.ORDERS["DEFAULT_DELIVERY_FEE"])
    except (InvalidOperation, ValueError, TypeError):
        logger.warning(
            "Invalid DEFAULT_DELIVERY_FEE setting, using 0",
            extra={"value": settings.ORDERS.get("DEFAULT_DELIVERY_FEE")},
        )
        return ZERO
    return fee if fee >= 0 else ZERO


def find_delivery_partner(partner_id) -> DeliveryPartner | None:
    try:
        pk = uuid.UUID(str(partner_id).strip())
    except (ValueError, AttributeError, TypeError):
        return None
    return DeliveryPartner.objects.filter(pk=pk).first()


def resolve_delivery_fee(partner_id=None, fallback_fee=None) -> DeliveryFee:
    """
    The returned `partner` is the active partner to attach to the order (if
    any), even when its fee is not configured and a lower tier priced it.
    """
    active_partner = None

    if partner_id:
        partner = find_delivery_partner(partner_id)
        if partner is None:
            logger.warning("Delivery partner not found", extra={"partner_id": str(partner_id)})
        elif not partner.is_active:
            logger.warning("Delivery partner inactive", extra={"partner_id": str(partner.id)})
        elif partner.delivery_fees is None:
            logger.info("Delivery partner has no fee configured", extra={"partner_id": str(partner.id)})
            active_partner = partner
        else:
            return DeliveryFee(
                amount=money(partner.delivery_fees),
                source=SOURCE_PARTNER,
                partner=partner,
            )

    if fallback_fee is not None and fallback_fee != "":
        fee = money(fallback_fee)
        if fee < 0:
            raise ValueError("delivery fee cannot be negative")
        return DeliveryFee(amount=fee, source=SOURCE_CALLER, partner=active_partner)

    return DeliveryFee(
        amount=default_delivery_fee(),
        source=SOURCE_DEFAULT,
        partner=active_partner,
    )


def active_delivery_partners():
    return list(DeliveryPartner.objects.filter(is_active=True).order_by("name"))
