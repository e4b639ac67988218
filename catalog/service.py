import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from catalog.book import Book, BookInput, BookView, utc_now
from catalog.errors import BookNotFoundError, DuplicateBookError, ValidationError
from catalog.unit_of_work import UnitOfWork
from utils.validators import BookValidator, ISBNValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")

SAMPLE_BOOKS = (
    BookInput(title="Clean Code", author="Robert C. Martin", isbn="9780132350884", publication_year=2008),
    BookInput(title="Design Patterns", author="Gang of Four", isbn="9780201633612", publication_year=1994),
    BookInput(title="Clean Architecture", author="Robert C. Martin", isbn="9780134494166", publication_year=2017),
)


class BookService:
    """Business rules for the catalog: validation, ISBN uniqueness, NotFound translation."""

    def __init__(self, unit_of_work: UnitOfWork, clock: Optional[Callable[[], datetime]] = None) -> None:
        if unit_of_work is None:
            raise ValueError("unit_of_work is required")
        self._uow = unit_of_work
        self._clock = clock or utc_now

    # ------------------------- Queries ------------------------- #
    def list_books(self) -> List[BookView]:
        return [BookView.from_book(b) for b in self._uow.books.get_all()]

    def get_book(self, book_id: uuid.UUID) -> BookView:
        return BookView.from_book(self._require(book_id))

    def get_book_by_isbn(self, isbn: str) -> BookView:
        self._validate_isbn(isbn)
        book = self._uow.books.get_by_isbn(isbn.strip())
        if book is None:
            raise BookNotFoundError(f"Book with ISBN {isbn} not found.")
        return BookView.from_book(book)

    def search_books(self, term: Optional[str]) -> List[BookView]:
        """Title/author/ISBN substring search. A blank term lists everything."""
        if term is None or not term.strip():
            return self.list_books()
        return [BookView.from_book(b) for b in self._uow.books.search(term.strip())]

    def get_statistics(self) -> Dict[str, Any]:
        books = self._uow.books.get_all()
        return {
            "total_books": len(books),
            "unique_authors": len({b.author for b in books}),
        }

    # ------------------------- Commands ------------------------- #
    def add_book(self, data: BookInput) -> BookView:
        self._validate(data)
        isbn = data.isbn.strip()
        if self._uow.books.exists(isbn):
            logger.warning(f"Rejected duplicate ISBN on add: {isbn}")
            raise DuplicateBookError(f"Book with ISBN {isbn} already exists.")

        now = self._clock()
        book = Book(
            title=data.title.strip(),
            author=data.author.strip(),
            isbn=isbn,
            publication_year=data.publication_year,
            created_at=now,
            updated_at=now,
        )

        def insert() -> Book:
            # Another add may have taken the ISBN since the check above
            if not self._uow.books.add_if_isbn_free(book):
                raise DuplicateBookError(f"Book with ISBN {isbn} already exists.")
            return book

        added = self._in_transaction(insert)
        logger.info(f"Added book {added.id}: {added}")
        return BookView.from_book(added)

    def update_book(self, book_id: uuid.UUID, data: BookInput) -> BookView:
        self._validate(data)
        book = self._require(book_id)
        isbn = data.isbn.strip()

        holder = self._uow.books.get_by_isbn(isbn)
        if holder is not None and holder.id != book_id:
            logger.warning(f"Rejected duplicate ISBN on update of {book_id}: {isbn}")
            raise DuplicateBookError(f"Another book with ISBN {isbn} already exists.")

        book.title = data.title.strip()
        book.author = data.author.strip()
        book.isbn = isbn
        book.publication_year = data.publication_year
        book.updated_at = max(self._clock(), book.updated_at)

        def replace() -> Book:
            if not self._uow.books.update_if_isbn_free(book):
                raise DuplicateBookError(f"Another book with ISBN {isbn} already exists.")
            return book

        updated = self._in_transaction(replace)
        logger.info(f"Updated book {updated.id}: {updated}")
        return BookView.from_book(updated)

    def delete_book(self, book_id: uuid.UUID) -> bool:
        self._require(book_id)
        removed = self._in_transaction(lambda: self._uow.books.delete(book_id))
        logger.info(f"Deleted book {book_id}: removed={removed}")
        return removed

    def seed(self, samples: Sequence[BookInput] = SAMPLE_BOOKS) -> int:
        """Add sample books, skipping any whose ISBN is already present."""
        added = 0
        for sample in samples:
            try:
                self.add_book(sample)
                added += 1
            except DuplicateBookError:
                continue
        return added

    # ------------------------- Helpers ------------------------- #
    def _require(self, book_id: uuid.UUID) -> Book:
        book = self._uow.books.get_by_id(book_id)
        if book is None:
            raise BookNotFoundError(f"Book with ID {book_id} not found.")
        return book

    def _in_transaction(self, action: Callable[[], T]) -> T:
        """begin -> action -> save -> commit; rollback and re-raise on failure."""
        self._uow.begin_transaction()
        try:
            result = action()
            self._uow.save_changes()
            self._uow.commit()
            return result
        except Exception as exc:
            logger.warning(f"Rolling back transaction: {exc}")
            self._uow.rollback()
            raise

    @staticmethod
    def _validate(data: BookInput) -> None:
        errors = BookValidator.validate(data)
        if errors:
            raise ValidationError.from_errors(errors)

    @staticmethod
    def _validate_isbn(isbn: Optional[str]) -> None:
        errors = ISBNValidator.validate(isbn)
        if errors:
            raise ValidationError(errors[0], errors)
