import copy
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from catalog.book import Book
from utils.validators import ISBNValidator


class BookRepository(ABC):
    """Data access for books.

    Implementations hand out copies; changing a returned Book has no effect
    on the stored record until it is passed back to ``update``.
    """

    @abstractmethod
    def get_all(self) -> List[Book]:
        """Snapshot of every stored book, in no particular order."""

    @abstractmethod
    def get_by_id(self, book_id: uuid.UUID) -> Optional[Book]:
        """Book with this id, or None."""

    @abstractmethod
    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """Book with this ISBN, or None.

        ISBNs are compared with hyphens and spaces removed, so
        ``978-0132350884`` and ``9780132350884`` match.
        """

    @abstractmethod
    def search(self, term: str) -> List[Book]:
        """Books whose title, author or ISBN contains ``term``, case-insensitively."""

    @abstractmethod
    def add(self, book: Book) -> Book:
        """Store ``book`` under its id. An existing record with that id is replaced."""

    @abstractmethod
    def add_if_isbn_free(self, book: Book) -> bool:
        """Store ``book`` only if no record holds its ISBN. Returns whether it was stored."""

    @abstractmethod
    def update(self, book: Book) -> Book:
        """Overwrite the record under ``book.id`` (inserting it if missing)."""

    @abstractmethod
    def update_if_isbn_free(self, book: Book) -> bool:
        """Overwrite ``book.id`` only if no other record holds its ISBN."""

    @abstractmethod
    def delete(self, book_id: uuid.UUID) -> bool:
        """Remove the record. Returns False if there was nothing to remove."""

    @abstractmethod
    def exists(self, isbn: str) -> bool:
        """True if any record holds this ISBN (hyphens and spaces ignored, as in ``get_by_isbn``)."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored books."""


class InMemoryBookRepository(BookRepository):
    """Process-lifetime store: a dict keyed by book id, guarded by one lock."""

    def __init__(self) -> None:
        self._books: Dict[uuid.UUID, Book] = {}
        self._lock = threading.RLock()

    def get_all(self) -> List[Book]:
        with self._lock:
            return [copy.copy(b) for b in self._books.values()]

    def get_by_id(self, book_id: uuid.UUID) -> Optional[Book]:
        with self._lock:
            book = self._books.get(book_id)
            return copy.copy(book) if book else None

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        with self._lock:
            book = self._find_by_isbn(isbn)
            return copy.copy(book) if book else None

    def search(self, term: str) -> List[Book]:
        needle = term.casefold()
        with self._lock:
            return [
                copy.copy(b)
                for b in self._books.values()
                if needle in b.title.casefold()
                or needle in b.author.casefold()
                or needle in b.isbn.casefold()
            ]

    def add(self, book: Book) -> Book:
        with self._lock:
            self._books[book.id] = copy.copy(book)
        return book

    def add_if_isbn_free(self, book: Book) -> bool:
        with self._lock:
            if self._find_by_isbn(book.isbn) is not None:
                return False
            self._books[book.id] = copy.copy(book)
            return True

    def update(self, book: Book) -> Book:
        with self._lock:
            self._books[book.id] = copy.copy(book)
        return book

    def update_if_isbn_free(self, book: Book) -> bool:
        with self._lock:
            holder = self._find_by_isbn(book.isbn)
            if holder is not None and holder.id != book.id:
                return False
            self._books[book.id] = copy.copy(book)
            return True

    def delete(self, book_id: uuid.UUID) -> bool:
        with self._lock:
            return self._books.pop(book_id, None) is not None

    def exists(self, isbn: str) -> bool:
        with self._lock:
            return self._find_by_isbn(isbn) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    # Caller must hold the lock.
    def _find_by_isbn(self, isbn: str) -> Optional[Book]:
        norm = ISBNValidator.normalize_isbn(isbn)
        for book in self._books.values():
            if ISBNValidator.normalize_isbn(book.isbn) == norm:
                return book
        return None
