# orders/services/results.py

"""
SERVICE RESULT

Mutating order-engine operations return a ServiceResult instead of raising
across the boundary, so API views, management commands and tests can branch
on `result.error.code` without parsing messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from orders.services.exceptions import OrderServiceError


@dataclass(frozen=True)
class ServiceResult:
    value: Any = None
    error: OrderServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error is not None else None

    @classmethod
    def success(cls, value) -> "ServiceResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: OrderServiceError) -> "ServiceResult":
        return cls(error=error)
