# backend/settings/__init__.py
"""
Settings modules, selected through DJANGO_SETTINGS_MODULE:

- backend.settings.dev    local development (SQLite, console logging)
- backend.settings.test   pytest-django (SQLite file DB, no throttling)
- backend.settings.prod   production (fails closed on unsafe config)
"""
