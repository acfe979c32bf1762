# catalog/models/__init__.py

from .book import Book

__all__ = ["Book"]
