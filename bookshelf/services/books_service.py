from __future__ import annotations

from typing import Any, Mapping

from ..repositories.books_repo import BooksRepository
from ..utils import parse_book_id

BOOK_FORM_FIELDS = ("title", "author", "cost", "shoppingUrl")


class BooksService:
    def __init__(self, store):
        self.repo = BooksRepository(store)

    def list_books(self) -> list[dict[str, Any]]:
        return self.repo.list_books()

    def count_books(self) -> int:
        return self.repo.count_books()

    def get_book(self, book_id_raw):
        book_id = parse_book_id(book_id_raw)
        if book_id is None:
            return None
        return self.repo.get_by_id(book_id)

    def create_book(self, form_data: Mapping[str, Any]):
        title, author, cost, shopping_url = self._form_fields(form_data)
        return self.repo.create_book(title, author, cost, shopping_url)

    def update_book(self, book_id_raw, form_data: Mapping[str, Any]):
        book_id = parse_book_id(book_id_raw)
        if book_id is None:
            return None

        title, author, cost, shopping_url = self._form_fields(form_data)
        return self.repo.update_book(book_id, title, author, cost, shopping_url)

    def delete_book(self, book_id_raw):
        book_id = parse_book_id(book_id_raw)
        if book_id is None:
            return None
        return self.repo.delete_book(book_id)

    @staticmethod
    def _form_fields(form_data: Mapping[str, Any]):
        # Values are stored as submitted; there is no trimming or validation.
        return tuple(form_data.get(field, "") for field in BOOK_FORM_FIELDS)
