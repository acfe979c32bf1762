# backend/settings/dev.py
"""
LOCAL DEVELOPMENT

SQLite from DATABASE_URL (base.py), DEBUG on, storefront dev servers
allowed as origins. Order engine loggers are turned up to DEBUG.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "0.0.0.0"])

_storefront_dev = ["http://localhost:3000", "http://localhost:5173"]
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=_storefront_dev)
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=_storefront_dev)
CORS_ALLOW_CREDENTIALS = True

for _app in ("catalog", "delivery", "discounts", "orders"):
    LOGGING["loggers"][_app]["level"] = env("LOG_LEVEL_DEV", default="DEBUG")
