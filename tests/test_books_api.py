"""Tests for the HTTP layer."""

from fastapi.testclient import TestClient

BOOKS = "/api/v1/books"


def create(client: TestClient, **fields) -> dict:
    payload = {"title": "Test Title", "author": "Test Author", "isbn": "1234567890"}
    payload.update(fields)
    response = client.post(f"{BOOKS}/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreate:
    def test_create_returns_201(self, client: TestClient) -> None:
        book = create(client, publicationDate="1999-12-31", genre="Fiction")
        assert book["id"] == 1
        assert book["available"] is True
        assert book["publicationDate"] == "1999-12-31"
        assert book["genre"] == "Fiction"
        assert book["description"] is None

    def test_snake_case_date_accepted(self, client: TestClient) -> None:
        book = create(client, publication_date="2005-06-07")
        assert book["publicationDate"] == "2005-06-07"

    def test_validation_errors_return_400_with_all_violations(self, client: TestClient) -> None:
        response = client.post(f"{BOOKS}/", json={"available": True})
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["message"] == "Validation failed"
        assert {v["field"] for v in detail["violations"]} == {"title", "author", "isbn"}

    def test_invalid_isbn(self, client: TestClient) -> None:
        response = client.post(f"{BOOKS}/", json={"title": "T", "author": "A", "isbn": "invalid-isbn"})
        assert response.status_code == 400
        assert response.json()["detail"]["violations"] == [
            {"field": "isbn", "message": "Invalid ISBN format"}
        ]

    def test_duplicate_isbn_returns_409(self, client: TestClient) -> None:
        first = create(client)
        response = client.post(f"{BOOKS}/", json={"title": "Other", "author": "B", "isbn": "1234567890"})
        assert response.status_code == 409
        assert response.json()["detail"] == "Book with ISBN 1234567890 already exists"
        assert client.get(f"{BOOKS}/{first['id']}").json() == first

    def test_wrong_type_is_rejected_by_schema(self, client: TestClient) -> None:
        response = client.post(f"{BOOKS}/", json={"title": "T", "author": "A", "isbn": "1234567890",
                                                  "publicationDate": "not a date"})
        assert response.status_code == 422


class TestRead:
    def test_list_and_get(self, client: TestClient) -> None:
        assert client.get(f"{BOOKS}/").json() == []
        book = create(client)
        assert client.get(f"{BOOKS}/").json() == [book]
        assert client.get(f"{BOOKS}/{book['id']}").json() == book

    def test_get_missing_returns_404(self, client: TestClient) -> None:
        response = client.get(f"{BOOKS}/123")
        assert response.status_code == 404
        assert response.json()["detail"] == "Book 123 not found"

    def test_get_by_isbn(self, client: TestClient) -> None:
        book = create(client)
        assert client.get(f"{BOOKS}/isbn/1234567890").json() == book
        assert client.get(f"{BOOKS}/isbn/0000000000").status_code == 404

    def test_searches(self, client: TestClient) -> None:
        create(client, title="The Hobbit", author="J. R. R. Tolkien", isbn="0261102214", genre="Fantasy")
        create(client, title="Dune", author="Frank Herbert", isbn="0441013597", genre="Science Fiction")
        assert [b["title"] for b in client.get(f"{BOOKS}/author/tolkien").json()] == ["The Hobbit"]
        assert [b["title"] for b in client.get(f"{BOOKS}/title/DUNE").json()] == ["Dune"]
        assert [b["title"] for b in client.get(f"{BOOKS}/genre/fiction").json()] == ["Dune"]
        assert client.get(f"{BOOKS}/genre/poetry").json() == []

    def test_search_values_may_contain_slash(self, client: TestClient) -> None:
        create(client, title="Back in Black", author="AC/DC", isbn="0000000001", genre="Hard Rock/Metal")
        assert [b["title"] for b in client.get(f"{BOOKS}/author/AC%2FDC").json()] == ["Back in Black"]
        assert [b["title"] for b in client.get(f"{BOOKS}/author/ac/dc").json()] == ["Back in Black"]
        assert [b["title"] for b in client.get(f"{BOOKS}/genre/rock%2Fmetal").json()] == ["Back in Black"]
        assert client.get(f"{BOOKS}/title/in/black").json() == []

    def test_search_ignores_accented_case(self, client: TestClient) -> None:
        create(client, title="Germinal", author="Émile Zola", isbn="0140447423")
        assert [b["title"] for b in client.get(f"{BOOKS}/author/émile").json()] == ["Germinal"]

    def test_available(self, client: TestClient) -> None:
        create(client, isbn="1111111111")
        hidden = create(client, isbn="2222222222", available=False)
        available = client.get(f"{BOOKS}/available").json()
        assert [b["isbn"] for b in available] == ["1111111111"]
        assert hidden["available"] is False


class TestUpdate:
    def test_partial_update(self, client: TestClient) -> None:
        book = create(client, genre="Fiction", description="Original")
        response = client.put(f"{BOOKS}/{book['id']}", json={"title": "Updated Title", "id": 999})
        assert response.status_code == 200
        assert response.json() == {**book, "title": "Updated Title"}

    def test_update_missing_returns_404(self, client: TestClient) -> None:
        assert client.put(f"{BOOKS}/42", json={"title": "X"}).status_code == 404

    def test_update_that_blanks_title_returns_400(self, client: TestClient) -> None:
        book = create(client)
        response = client.put(f"{BOOKS}/{book['id']}", json={"title": ""})
        assert response.status_code == 400
        assert client.get(f"{BOOKS}/{book['id']}").json() == book

    def test_update_to_taken_isbn_returns_409(self, client: TestClient) -> None:
        create(client, isbn="1111111111")
        second = create(client, isbn="2222222222")
        response = client.put(f"{BOOKS}/{second['id']}", json={"isbn": "1111111111"})
        assert response.status_code == 409


class TestDeleteAndToggle:
    def test_delete_scenario(self, client: TestClient) -> None:
        book = create(client)
        response = client.delete(f"{BOOKS}/{book['id']}")
        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"{BOOKS}/{book['id']}").status_code == 404
        assert client.delete(f"{BOOKS}/{book['id']}").status_code == 404
        assert client.put(f"{BOOKS}/{book['id']}", json={"title": "X"}).status_code == 404

    def test_toggle(self, client: TestClient) -> None:
        book = create(client)
        first = client.patch(f"{BOOKS}/{book['id']}/availability")
        assert first.status_code == 200
        assert first.json()["available"] is False
        second = client.patch(f"{BOOKS}/{book['id']}/availability")
        assert second.json() == book

    def test_toggle_missing_returns_404(self, client: TestClient) -> None:
        assert client.patch(f"{BOOKS}/7/availability").status_code == 404


class TestInfo:
    def test_info_counts_books(self, client: TestClient) -> None:
        create(client)
        body = client.get("/api/v1/info/").json()
        assert body["name"] == "Book Library API"
        assert body["books"] == 1
