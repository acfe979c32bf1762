# backend/settings/prod.py
"""
PRODUCTION SETTINGS (bookstore API)

Refuses to boot on unsafe configuration:
- missing or placeholder SECRET_KEY, empty ALLOWED_HOSTS
- SQLite or missing DATABASE_URL (order writes rely on Postgres row locks)
- storefront origins that are plain http or point at localhost
- a negative or non-numeric default delivery fee, or a list default above the cap

Static files are served by WhiteNoise behind the TLS-terminating proxy.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403
from .base import BASE_DIR, MIDDLEWARE, ORDERS, env


def _require(condition, message: str) -> None:
    if not condition:
        raise ImproperlyConfigured(message)


DEBUG = False

SECRET_KEY = (env("SECRET_KEY", default="") or "").strip()
_require(
    SECRET_KEY and SECRET_KEY != "dev-insecure-change-me",
    "Set SECRET_KEY to a strong value before running the bookstore API in production.",
)

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=[])
_require(ALLOWED_HOSTS, "ALLOWED_HOSTS is empty.")

# ----------------------------
# Database: Postgres only
# ----------------------------
_db_url = (env("DATABASE_URL", default="") or "").strip()
_require(_db_url, "DATABASE_URL is required in production.")
_require(not _db_url.startswith("sqlite"), "SQLite is not supported in production; use Postgres.")

DATABASES = {"default": env.db("DATABASE_URL")}
DATABASES["default"]["CONN_MAX_AGE"] = env.int("DB_CONN_MAX_AGE", default=60)

# ----------------------------
# Order engine knobs
# ----------------------------
try:
    _fallback_fee = Decimal(ORDERS["DEFAULT_DELIVERY_FEE"])
except InvalidOperation as exc:
    raise ImproperlyConfigured(
        f"DEFAULT_DELIVERY_FEE={ORDERS['DEFAULT_DELIVERY_FEE']!r} is not a decimal amount."
    ) from exc
_require(_fallback_fee >= 0, "DEFAULT_DELIVERY_FEE must be zero or positive.")
_require(
    ORDERS["LIST_DEFAULT_LIMIT"] <= ORDERS["LIST_MAX_LIMIT"],
    "ORDER_LIST_DEFAULT_LIMIT is larger than ORDER_LIST_MAX_LIMIT.",
)
_require(ORDERS["CODE_LENGTH"] >= 6, "ORDER_CODE_LENGTH below 6 makes order codes guessable.")

# ----------------------------
# Static files
# ----------------------------
STATIC_ROOT = env("STATIC_ROOT", default=str(BASE_DIR / "staticfiles"))
MIDDLEWARE.insert(1, "whitenoise.middleware.WhiteNoiseMiddleware")
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# ----------------------------
# TLS, cookies, headers
# ----------------------------
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)
SECURE_HSTS_SECONDS = env.int("SECURE_HSTS_SECONDS", default=3600)
SECURE_HSTS_INCLUDE_SUBDOMAINS = env.bool("SECURE_HSTS_INCLUDE_SUBDOMAINS", default=True)
SECURE_HSTS_PRELOAD = env.bool("SECURE_HSTS_PRELOAD", default=False)

SESSION_COOKIE_SECURE = CSRF_COOKIE_SECURE = True
SESSION_COOKIE_HTTPONLY = CSRF_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = CSRF_COOKIE_SAMESITE = "Lax"

SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = "same-origin"
SECURE_CROSS_ORIGIN_OPENER_POLICY = "same-origin"
X_FRAME_OPTIONS = "DENY"

# ----------------------------
# Storefront origins (https, no localhost)
# ----------------------------
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=[])
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[])

for _name, _origins in (
    ("CORS_ALLOWED_ORIGINS", CORS_ALLOWED_ORIGINS),
    ("CSRF_TRUSTED_ORIGINS", CSRF_TRUSTED_ORIGINS),
):
    _require(_origins, f"{_name} is empty.")
    _require(
        not any("localhost" in o or "127.0.0.1" in o for o in _origins),
        f"{_name} points at localhost.",
    )
    _require(all(o.startswith("https://") for o in _origins), f"{_name} must list https:// origins only.")

CORS_ALLOW_CREDENTIALS = False
