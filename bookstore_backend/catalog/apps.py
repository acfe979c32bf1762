# catalog/apps.py

"""
CATALOG APP CONFIG

Catalog collaborator for the order engine:
- Book rows (title, slug, price, stock)
- Lookup by id / slug
- Low-stock report
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalog"
