from .books_repo import BooksRepository

__all__ = [
    "BooksRepository",
]
