from typing import List, Optional


class CatalogError(Exception):
    """Base exception for catalog errors."""


class BookNotFoundError(CatalogError):
    """Requested id or ISBN has no matching book."""


class DuplicateBookError(CatalogError):
    """Adding or updating a book would reuse an ISBN already in the catalog."""


class ValidationError(CatalogError):
    """Input failed one or more shape, range or format rules."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors: List[str] = list(errors) if errors else [message]

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationError":
        return cls(f"Validation failed: {', '.join(errors)}", errors)
