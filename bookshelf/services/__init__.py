from .books_service import BooksService

__all__ = [
    "BooksService",
]
