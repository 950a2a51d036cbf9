"""
Book endpoints for API v1.

These routes expose the catalog: listing and searching books, CRUD
operations on a single book and toggling its availability.  Handlers
delegate to ``BookService`` and translate its outcomes into HTTP
responses: 404 for an unknown book, 409 for a duplicate ISBN and 400
with the full list of field violations for an invalid record.

Static paths (``/available``, ``/isbn/...``) are declared before
``/{book_id}`` so they are not captured by it.  Search values use the
``path`` convertor so a value containing ``/`` (e.g. "AC/DC") still
reaches the search route.
"""

from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from book_library_api.app.models.book import Book
from book_library_api.app.schemas.book import BookCreate, BookRead, BookUpdate
from book_library_api.app.services.book_service import BookOutcome, BookService, OutcomeStatus

router = APIRouter()


def get_book_service() -> BookService:
    """Dependency returning a service bound to the SQLite store."""
    return BookService()


def _to_read(books: List[Book]) -> List[BookRead]:
    return [BookRead.model_validate(book) for book in books]


def _raise_for_outcome(outcome: BookOutcome) -> NoReturn:
    if outcome.status is OutcomeStatus.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=outcome.message)
    if outcome.status is OutcomeStatus.CONFLICT:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=outcome.message)
    if outcome.status is OutcomeStatus.INVALID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": outcome.message,
                "violations": [{"field": v.field, "message": v.message} for v in outcome.violations],
            },
        )
    raise RuntimeError(f"Unexpected outcome {outcome.status}")


def _book_or_raise(outcome: BookOutcome) -> BookRead:
    if not outcome.ok:
        _raise_for_outcome(outcome)
    return BookRead.model_validate(outcome.book)


@router.get("/", response_model=List[BookRead], summary="Get all books")
async def list_books(service: BookService = Depends(get_book_service)) -> List[BookRead]:
    return _to_read(await service.list_books())


@router.get("/available", response_model=List[BookRead], summary="Get all available books")
async def list_available_books(service: BookService = Depends(get_book_service)) -> List[BookRead]:
    return _to_read(await service.list_available_books())


@router.get("/isbn/{isbn}", response_model=BookRead, summary="Get a book by ISBN")
async def get_book_by_isbn(isbn: str, service: BookService = Depends(get_book_service)) -> BookRead:
    return _book_or_raise(await service.get_book_by_isbn(isbn))


@router.get("/author/{author:path}", response_model=List[BookRead], summary="Get books by author")
async def list_books_by_author(author: str, service: BookService = Depends(get_book_service)) -> List[BookRead]:
    """Books whose author contains ``author``, ignoring case."""
    return _to_read(await service.list_books_by_author(author))


@router.get("/title/{title:path}", response_model=List[BookRead], summary="Get books by title")
async def list_books_by_title(title: str, service: BookService = Depends(get_book_service)) -> List[BookRead]:
    """Books whose title contains ``title``, ignoring case."""
    return _to_read(await service.list_books_by_title(title))


@router.get("/genre/{genre:path}", response_model=List[BookRead], summary="Get books by genre")
async def list_books_by_genre(genre: str, service: BookService = Depends(get_book_service)) -> List[BookRead]:
    """Books whose genre contains ``genre``, ignoring case."""
    return _to_read(await service.list_books_by_genre(genre))


@router.get("/{book_id}", response_model=BookRead, summary="Get a book by ID")
async def get_book(book_id: int, service: BookService = Depends(get_book_service)) -> BookRead:
    return _book_or_raise(await service.get_book(book_id))


@router.post("/", response_model=BookRead, status_code=status.HTTP_201_CREATED, summary="Create a new book")
async def create_book(book_in: BookCreate, service: BookService = Depends(get_book_service)) -> BookRead:
    """Create a book.

    ``available`` defaults to true.  Returns 400 listing every field
    violation, or 409 if another book already has the ISBN.
    """
    return _book_or_raise(await service.create_book(book_in))


@router.put("/{book_id}", response_model=BookRead, summary="Update a book")
async def update_book(
    book_id: int,
    book_in: BookUpdate,
    service: BookService = Depends(get_book_service),
) -> BookRead:
    """Update an existing book.

    Partial updates are supported; fields that are omitted or null keep
    their stored value.  The merged record must still pass validation.
    """
    return _book_or_raise(await service.update_book(book_id, book_in))


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a book")
async def delete_book(book_id: int, service: BookService = Depends(get_book_service)) -> None:
    outcome = await service.delete_book(book_id)
    if not outcome.ok:
        _raise_for_outcome(outcome)
    return None


@router.patch("/{book_id}/availability", response_model=BookRead, summary="Toggle book availability")
async def toggle_availability(book_id: int, service: BookService = Depends(get_book_service)) -> BookRead:
    return _book_or_raise(await service.toggle_availability(book_id))
