"""
Pydantic models for book data.

``BookCreate`` and ``BookUpdate`` deliberately declare every field as
optional: required-field and length rules are enforced by
``services.book_validation`` so that all violations are reported
together with a 400 response instead of pydantic's 422.  The
publication date travels as ``publicationDate`` on the wire; the
snake_case name is accepted on input too.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class BookBase(BaseModel):
    title: Optional[str] = Field(None, examples=["Test Title"])
    author: Optional[str] = Field(None, examples=["Test Author"])
    isbn: Optional[str] = Field(None, examples=["9780123456789"])
    publication_date: Optional[date] = Field(
        None, alias="publicationDate", examples=["2020-05-17"]
    )
    genre: Optional[str] = Field(None, examples=["Fiction"])
    description: Optional[str] = Field(None, examples=["A short description"])

    model_config = {
        "populate_by_name": True,
    }


class BookCreate(BookBase):
    """Schema for creating a book.

    ``available`` defaults to true when omitted or sent as null.
    """

    available: Optional[bool] = Field(None, examples=[True])


class BookUpdate(BookBase):
    """Schema for updating a book.

    All fields are optional; only fields that are not null are merged
    into the stored record.
    """

    available: Optional[bool] = None


class BookRead(BaseModel):
    """Schema for reading a book from the API."""

    id: int
    title: str
    author: str
    isbn: str
    publication_date: Optional[date] = Field(None, alias="publicationDate")
    genre: Optional[str] = None
    description: Optional[str] = None
    available: bool

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class ViolationRead(BaseModel):
    field: str
    message: str


class ValidationErrorRead(BaseModel):
    """Body of a 400 response."""

    message: str = "Validation failed"
    violations: List[ViolationRead]
