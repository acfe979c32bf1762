"""
PATH: backend/settings/test.py

TEST SETTINGS (pytest-django)

- SQLite file database (not :memory:) so worker threads in the concurrency
  tests share one database with the main thread.
- Fast password hashing, no throttling surprises.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import BASE_DIR, REST_FRAMEWORK, env

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": str(BASE_DIR / "test_db.sqlite3"),
        "OPTIONS": {
            "transaction_mode": "IMMEDIATE",
            "timeout": env.int("SQLITE_LOCK_TIMEOUT"),
        },
        "TEST": {
            "NAME": str(BASE_DIR / "test_db.sqlite3"),
        },
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": (),
    "DEFAULT_THROTTLE_RATES": {
        "anon": "10000/min",
        "user": "10000/min",
        "public_poll": "10000/min",
        "public_write": "10000/min",
    },
}
