from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ``yyyy-MM-dd HH:mm:ss`` in UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


@dataclass
class Book:
    """A single book record held by the catalog store."""

    title: str
    author: str
    isbn: str
    publication_year: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __str__(self) -> str:
        return f"{self.title} by {self.author} ({self.publication_year}) - ISBN: {self.isbn}"


@dataclass
class BookInput:
    """Create/update payload as entered by a caller, before validation."""

    title: str = ""
    author: str = ""
    isbn: str = ""
    publication_year: int = 0


@dataclass(frozen=True)
class BookView:
    """Read-facing projection of a Book handed across the service boundary."""

    id: uuid.UUID
    title: str
    author: str
    isbn: str
    publication_year: int
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_book(book: Book) -> "BookView":
        return BookView(
            id=book.id,
            title=book.title,
            author=book.author,
            isbn=book.isbn,
            publication_year=book.publication_year,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publication_year": self.publication_year,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }
