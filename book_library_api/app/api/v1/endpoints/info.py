"""
Information endpoint for API v1.

Returns the service name, API version and the number of books in the
catalog.  Useful as a liveness check that also touches the database.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from book_library_api.app.api.v1.endpoints.books import get_book_service
from book_library_api.app.core.config import settings
from book_library_api.app.services.book_service import BookService

router = APIRouter()


@router.get("/", response_model=Dict[str, Any], summary="Service information")
async def get_info(service: BookService = Depends(get_book_service)) -> Dict[str, Any]:
    return {
        "name": settings.project_name,
        "version": settings.api_version,
        "books": await service.count_books(),
    }
