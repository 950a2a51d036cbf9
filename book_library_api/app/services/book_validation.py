"""
Field validation for book records.

``validate_book`` checks a candidate against the catalog rules and
returns every violation it finds; rules are independent and none of
them short-circuits another.  A candidate with no violations may be
persisted.

ISBNs are checked structurally only: ten characters where the first
nine are digits and the last is a digit or an uppercase ``X``
(ISBN-10), or thirteen digits (ISBN-13).  Only ASCII digits count.
Check digits are not verified, and hyphens, spaces and a lowercase
``x`` are rejected.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional

TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
ISBN_MAX_LENGTH = 20
GENRE_MAX_LENGTH = 50

INVALID_ISBN_MESSAGE = "Invalid ISBN format"

_ISBN_RE = re.compile(r"^(?:[0-9]{9}[0-9X]|[0-9]{13})$")


@dataclass(frozen=True)
class Violation:
    """A single failed rule, naming the offending field."""

    field: str
    message: str


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_isbn(value: Optional[str]) -> bool:
    """Return ``True`` if ``value`` has the shape of an ISBN-10 or ISBN-13."""
    if value is None:
        return False
    return _ISBN_RE.fullmatch(value) is not None


def _check_required(field: str, label: str, value: Optional[str], max_length: int) -> List[Violation]:
    violations: List[Violation] = []
    if is_blank(value):
        violations.append(Violation(field, f"{label} is required"))
    if value is not None and len(value) > max_length:
        violations.append(Violation(field, f"{label} must be at most {max_length} characters"))
    return violations


def validate_book(candidate: Any) -> List[Violation]:
    """Validate a candidate book and return all violations.

    ``candidate`` may be any object exposing the book attributes
    (``title``, ``author``, ``isbn``, ``genre``, ``available``), e.g. a
    ``models.Book`` or one of the request schemas.  Missing attributes
    are treated as ``None``.
    """
    title = getattr(candidate, "title", None)
    author = getattr(candidate, "author", None)
    isbn = getattr(candidate, "isbn", None)
    genre = getattr(candidate, "genre", None)
    available = getattr(candidate, "available", None)

    violations: List[Violation] = []
    violations += _check_required("title", "Title", title, TITLE_MAX_LENGTH)
    violations += _check_required("author", "Author", author, AUTHOR_MAX_LENGTH)
    violations += _check_required("isbn", "ISBN", isbn, ISBN_MAX_LENGTH)
    # Format is only checked once there is something to check; a blank
    # value is already reported above.
    if not is_blank(isbn) and not is_valid_isbn(isbn):
        violations.append(Violation("isbn", INVALID_ISBN_MESSAGE))
    if genre is not None and len(genre) > GENRE_MAX_LENGTH:
        violations.append(Violation("genre", f"Genre must be at most {GENRE_MAX_LENGTH} characters"))
    if available is None:
        violations.append(Violation("available", "Availability is required"))
    return violations
