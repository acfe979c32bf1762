# catalog/services/lookup.py

"""
CATALOG LOOKUP (COLLABORATOR)

Purpose:
- Resolve a cart line's book reference to a Book row.

References are an explicit tagged value (BookRef):
- BookRef.by_id(uuid)     -> primary-key lookup, slug fallback
- BookRef.by_slug(slug)   -> slug lookup only
- BookRef.parse(raw)      -> legacy clients that send one opaque string;
                             UUID-shaped strings become by_id, the rest by_slug

Rules:
- Lookups never raise for "not found"; callers decide what absence means.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from catalog.models import Book


@dataclass(frozen=True)
class BookRef:
    kind: str
    value: str

    BY_ID = "id"
    BY_SLUG = "slug"

    @classmethod
    def by_id(cls, book_id) -> "BookRef":
        return cls(kind=cls.BY_ID, value=str(book_id).strip())

    @classmethod
    def by_slug(cls, slug: str) -> "BookRef":
        return cls(kind=cls.BY_SLUG, value=str(slug).strip())

    @classmethod
    def parse(cls, raw) -> "BookRef":
        text = str(raw or "").strip()
        if _as_uuid(text) is not None:
            return cls.by_id(text)
        return cls.by_slug(text)

    def __str__(self):
        return self.value


def _as_uuid(value) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError, TypeError):
        return None


def find_book_by_id(book_id) -> Book | None:
    pk = _as_uuid(book_id)
    if pk is None:
        return None
    return Book.objects.filter(pk=pk).first()


def find_book_by_slug(slug: str) -> Book | None:
    slug = str(slug or "").strip()
    if not slug:
        return None
    return Book.objects.filter(slug=slug).first()


def resolve_book(ref: BookRef) -> Book | None:
    """
    Id form first (only when it is a syntactically valid id), then slug.
    """
    if ref.kind == BookRef.BY_ID:
        book = find_book_by_id(ref.value)
        if book is not None:
            return book
    return find_book_by_slug(ref.value)
