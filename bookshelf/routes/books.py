from flask import Blueprint, current_app, jsonify, redirect, render_template, request, url_for

from ..db import get_store
from ..extensions import limiter
from ..services.books_service import BooksService
from ..storage import BookStoreError

books_bp = Blueprint("books", __name__)

NOT_FOUND_MESSAGE = "Book not found"


def _books_service() -> BooksService:
    return BooksService(get_store())


def _write_rate_limit() -> str:
    return current_app.config.get("WRITE_RATE_LIMIT", "60 per minute")


def _book_not_found(book_id):
    current_app.logger.info("No book with id %r", book_id)
    return NOT_FOUND_MESSAGE, 404, {"Content-Type": "text/plain; charset=utf-8"}


@books_bp.route("/")
def index():
    return render_template("index.html", books=_books_service().list_books())


@books_bp.route("/add", methods=["GET"])
def add_form():
    return render_template("add.html")


@books_bp.route("/add", methods=["POST"])
@limiter.limit(_write_rate_limit, methods=["POST"])
def add_book():
    book = _books_service().create_book(request.form)
    current_app.logger.info("Book %s created", book["id"])
    return redirect(url_for("books.index"))


@books_bp.route("/book/<book_id>")
def book_detail(book_id):
    book = _books_service().get_book(book_id)
    if not book:
        return _book_not_found(book_id)
    return render_template("book.html", book=book)


@books_bp.route("/edit/<book_id>", methods=["GET"])
def edit_form(book_id):
    book = _books_service().get_book(book_id)
    if not book:
        return _book_not_found(book_id)
    return render_template("edit.html", book=book)


@books_bp.route("/edit/<book_id>", methods=["POST"])
@limiter.limit(_write_rate_limit, methods=["POST"])
def update_book(book_id):
    updated = _books_service().update_book(book_id, request.form)
    if not updated:
        return _book_not_found(book_id)

    current_app.logger.info("Book %s updated", updated["id"])
    return redirect(url_for("books.book_detail", book_id=updated["id"]))


@books_bp.route("/delete/<book_id>", methods=["POST"])
@limiter.limit(_write_rate_limit, methods=["POST"])
def delete_book(book_id):
    deleted = _books_service().delete_book(book_id)
    if not deleted:
        return _book_not_found(book_id)

    current_app.logger.info("Book %s deleted", deleted["id"])
    return redirect(url_for("books.index"))


@books_bp.route("/healthz")
def healthz():
    store = get_store()
    try:
        total = _books_service().count_books()
    except BookStoreError as exc:
        return jsonify({"status": "degraded", "store": store.backend, "error": str(exc)}), 503

    return jsonify({"status": "ok", "store": store.backend, "books": total})
