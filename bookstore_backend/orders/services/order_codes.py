# orders/services/order_codes.py

"""
ORDER CODE GENERATOR

Public, human-shareable order identifier: PREFIX-XXXXXX.

- Drawn with `secrets` (not guessable from neighbouring orders).
- Alphabet skips look-alikes (0/O, 1/I/L) so codes survive being read
  over the phone.
- Uniqueness is enforced by the DB unique constraint on Order.order_code;
  the placement service retries on collision.
"""

from __future__ import annotations

import secrets

from django.conf import settings

ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"


def generate_order_code(prefix: str | None = None, length: int | None = None) -> str:
    cfg = settings.ORDERS
    prefix = (prefix if prefix is not None else cfg["CODE_PREFIX"]).strip().upper()
    length = int(length if length is not None else cfg["CODE_LENGTH"])
    if length < 4:
        raise ValueError("order code length must be at least 4")

    body = "".join(secrets.choice(ALPHABET) for _ in range(length))
    return f"{prefix}-{body}" if prefix else body
