# discounts/services/exceptions.py

"""
DISCOUNT LEDGER ERRORS

One class per rejection rule so the checkout page can say *why* a code
failed (not started yet, expired, below minimum...).
"""

from __future__ import annotations

from orders.services.exceptions import OrderServiceError


class DiscountError(OrderServiceError):
    code = "discount_error"
    default_message = "Discount code cannot be applied."

    def __init__(self, discount_code: str, message: str | None = None, **detail):
        self.discount_code = discount_code
        super().__init__(message, discount_code=discount_code, **detail)


class CodeNotFound(DiscountError):
    code = "discount_code_not_found"
    default_message = "Discount code not found."


class Inactive(DiscountError):
    code = "discount_inactive"
    default_message = "Discount code is disabled."


class NotStarted(DiscountError):
    code = "discount_not_started"
    default_message = "Discount code is not active yet."

    def __init__(self, discount_code: str, *, start_date):
        self.start_date = start_date
        super().__init__(discount_code, start_date=start_date.isoformat())


class Expired(DiscountError):
    code = "discount_expired"
    default_message = "Discount code has expired."

    def __init__(self, discount_code: str, *, end_date):
        self.end_date = end_date
        super().__init__(discount_code, end_date=end_date.isoformat())


class UsageLimitReached(DiscountError):
    code = "discount_usage_limit_reached"
    default_message = "Discount code has reached its usage limit."

    def __init__(self, discount_code: str, *, usage_limit):
        self.usage_limit = usage_limit
        super().__init__(discount_code, usage_limit=usage_limit)


class BelowMinimum(DiscountError):
    code = "discount_below_minimum"

    def __init__(self, discount_code: str, *, min_order_total, subtotal):
        self.min_order_total = min_order_total
        self.subtotal = subtotal
        super().__init__(
            discount_code,
            f"Minimum order total for this code is {min_order_total}.",
            min_order_total=str(min_order_total),
            subtotal=str(subtotal),
        )


class PerCustomerLimitReached(DiscountError):
    code = "discount_per_customer_limit_reached"
    default_message = "You have already used this discount code the maximum number of times."

    def __init__(self, discount_code: str, *, per_user_limit):
        self.per_user_limit = per_user_limit
        super().__init__(discount_code, per_user_limit=per_user_limit)
