"""Book Library API client.

This module defines a thin client wrapper around the REST API served by
``book_library_api``.  It uses the ``requests`` library internally and
exposes one method per catalog operation:

* :meth:`list_books` – return every book.
* :meth:`get_book` / :meth:`get_book_by_isbn` – fetch a single book.
* :meth:`list_books_by_author`, :meth:`list_books_by_title`,
  :meth:`list_books_by_genre` – substring searches.
* :meth:`list_available_books` – books that can be borrowed.
* :meth:`create_book`, :meth:`update_book`, :meth:`delete_book` – CRUD.
* :meth:`toggle_availability` – flip the ``available`` flag.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary
with keys ``status_code`` and ``message``.  For a 400 response the
dictionary also carries the ``violations`` reported by the server.

The client supports optional authentication via an API key which will
be sent in the ``Authorization`` header, for deployments that put the
service behind an authenticating proxy.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class BookLibraryAPI:
    """Client for interacting with the book library API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api/v1/books",
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            prefix: Path under which the book routes are mounted.
            api_key: Optional API key.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` will be
                included in all requests.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``PATCH``, ``DELETE``).
            path: Path relative to the book prefix (e.g. ``/isbn/123``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies).
        """
        url = f"{self.base_url}{self.prefix}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            return None, self._http_error(exc)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _http_error(exc: requests.HTTPError) -> Error:
        response = exc.response
        status = response.status_code if response is not None else None
        error: Error = {"status_code": status, "message": ""}
        if response is not None:
            try:
                body = response.json()
                detail = body.get("detail") if isinstance(body, dict) else body
            except ValueError:
                detail = response.text
            if isinstance(detail, dict):
                error["message"] = detail.get("message", "")
                error["violations"] = detail.get("violations", [])
            elif detail:
                error["message"] = str(detail)
        if not error["message"]:
            error["message"] = str(exc)
        logger.error("API request failed (%s): %s", status, error["message"])
        return error

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_books(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/")

    def list_available_books(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/available")

    def list_books_by_author(self, author: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/author/{quote(author, safe='')}")

    def list_books_by_title(self, title: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/title/{quote(title, safe='')}")

    def list_books_by_genre(self, genre: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/genre/{quote(genre, safe='')}")

    def get_book(self, book_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/{book_id}")

    def get_book_by_isbn(self, isbn: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/isbn/{quote(isbn, safe='')}")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create_book(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a book.

        Args:
            payload: Book fields, e.g. ``{"title": ..., "author": ..., "isbn": ...}``.
        """
        return self._request("POST", "/", json_body=payload)

    def update_book(
        self, book_id: int, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Merge ``payload`` into an existing book; omitted fields are kept."""
        return self._request("PUT", f"/{book_id}", json_body=payload)

    def delete_book(self, book_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/{book_id}")
        return error is None, error

    def toggle_availability(self, book_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PATCH", f"/{book_id}/availability")
