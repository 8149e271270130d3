import logging
from pathlib import Path

from flask import Flask

from .config import Config
from .db import init_store
from .extensions import csrf, limiter
from .routes.books import books_bp
from .storage import BookStoreError


def create_app(config_class=Config):
    base_dir = Path(__file__).resolve().parents[1]
    template_dir = base_dir / "templates"
    static_dir = base_dir / "static"

    app = Flask(
        __name__,
        template_folder=str(template_dir),
        static_folder=str(static_dir),
    )
    app.config.from_object(config_class)
    app.logger.setLevel(_log_level(app.config.get("LOG_LEVEL")))

    csrf.init_app(app)
    limiter.init_app(app)
    init_store(app)

    @app.template_filter("cost")
    def cost(value):
        return _format_cost(value)

    app.register_blueprint(books_bp)

    @app.errorhandler(BookStoreError)
    def book_store_error(exc):
        app.logger.exception("Book store failure: %s", exc)
        return "Book store unavailable", 500, {"Content-Type": "text/plain; charset=utf-8"}

    return app


def _format_cost(value) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return f"{value:.2f}"

    candidate = str(value).strip()
    try:
        return f"{float(candidate):.2f}"
    except ValueError:
        return candidate


def _log_level(value) -> int:
    level = logging.getLevelName(str(value or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO
