import re
from typing import List, Optional

TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
MIN_PUBLICATION_YEAR = 1800
MAX_PUBLICATION_YEAR = 2100

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class ISBNValidator:
    """ISBN-10 / ISBN-13 format checks. Length and digits only, no checksum."""

    @staticmethod
    def normalize_isbn(raw: Optional[str]) -> str:
        if raw is None:
            return ""
        return raw.strip().replace("-", "").replace(" ", "")

    @staticmethod
    def validate(isbn: Optional[str]) -> List[str]:
        """Return the violated ISBN rules; an empty list means well-formed."""
        if isbn is None or not isbn.strip():
            return ["ISBN cannot be empty."]
        s = ISBNValidator.normalize_isbn(isbn)
        if len(s) not in (10, 13):
            return ["ISBN must be 10 or 13 characters long."]
        # str.isdigit() also accepts superscripts and other unicode digits
        if not all(ch in "0123456789" for ch in s):
            return ["ISBN must contain only digits."]
        return []


class TextValidator:
    """Required/length checks for free-text fields and console input cleanup."""

    @staticmethod
    def validate_required(value: Optional[str], label: str, max_length: int) -> List[str]:
        text = (value or "").strip()
        if not text:
            return [f"{label} is required."]
        if len(text) > max_length:
            return [f"{label} must be at most {max_length} characters."]
        return []

    @staticmethod
    def validate_title(title: Optional[str]) -> List[str]:
        return TextValidator.validate_required(title, "Title", TITLE_MAX_LENGTH)

    @staticmethod
    def validate_author(author: Optional[str]) -> List[str]:
        return TextValidator.validate_required(author, "Author", AUTHOR_MAX_LENGTH)

    @staticmethod
    def sanitize_input(text: Optional[str]) -> str:
        """Trim and drop control characters from raw console input."""
        if text is None or not text.strip():
            return ""
        return _CONTROL_CHARS.sub("", text.strip())


class BookValidator:
    """Collects every violated rule of a create/update payload."""

    @staticmethod
    def validate_year(year) -> List[str]:
        # bool is an int subclass; True is not a year
        if isinstance(year, bool) or not isinstance(year, int):
            return [f"Publication year must be between {MIN_PUBLICATION_YEAR} and {MAX_PUBLICATION_YEAR}."]
        if not MIN_PUBLICATION_YEAR <= year <= MAX_PUBLICATION_YEAR:
            return [f"Publication year must be between {MIN_PUBLICATION_YEAR} and {MAX_PUBLICATION_YEAR}."]
        return []

    @staticmethod
    def validate(data) -> List[str]:
        errors: List[str] = []
        errors += TextValidator.validate_title(data.title)
        errors += TextValidator.validate_author(data.author)
        errors += ISBNValidator.validate(data.isbn)
        errors += BookValidator.validate_year(data.publication_year)
        return errors
