from __future__ import annotations

from typing import Any

from ..utils import now_millis


class BooksRepository:
    """CRUD over the whole book collection held by a store.

    Each call loads the full collection, works on it in memory and, for
    mutations, saves the full collection back. ``None`` means no book has
    the requested id; in that case nothing is written.
    """

    def __init__(self, store):
        self.store = store

    def list_books(self) -> list[dict[str, Any]]:
        return self.store.load()

    def count_books(self) -> int:
        return len(self.store.load())

    def create_book(self, title, author, cost, shopping_url) -> dict[str, Any]:
        books = self.store.load()

        # Millisecond timestamps collide when two creates share a clock tick.
        book = _book_record(now_millis(), title, author, cost, shopping_url)
        books.append(book)

        self.store.save(books)
        return book

    def get_by_id(self, book_id: int):
        books = self.store.load()
        return next((book for book in books if _matches(book, book_id)), None)

    def update_book(self, book_id: int, title, author, cost, shopping_url):
        books = self.store.load()
        index = _find_index(books, book_id)
        if index is None:
            return None

        books[index] = _book_record(book_id, title, author, cost, shopping_url)
        self.store.save(books)
        return books[index]

    def delete_book(self, book_id: int):
        books = self.store.load()
        index = _find_index(books, book_id)
        if index is None:
            return None

        deleted = books.pop(index)
        self.store.save(books)
        return deleted


def _find_index(books: list[dict[str, Any]], book_id: int) -> int | None:
    return next((index for index, book in enumerate(books) if _matches(book, book_id)), None)


def _book_record(book_id: int, title, author, cost, shopping_url) -> dict[str, Any]:
    return {
        "id": book_id,
        "title": title,
        "author": author,
        "cost": cost,
        "shoppingUrl": shopping_url,
    }


def _matches(book, book_id: int) -> bool:
    # Entries are not validated on load, so non-object entries never match.
    return isinstance(book, dict) and book.get("id") == book_id
