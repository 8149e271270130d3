import json

import mongomock
import pytest

from bookshelf import create_app
from bookshelf.config import TestConfig
from bookshelf.storage import JsonBookStore, MongoBookStore, ensure_indexes


def write_books(path, books):
    path.write_text(json.dumps(books, indent=2), encoding="utf-8")


def read_books(path):
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def books_file(tmp_path):
    path = tmp_path / "data" / "books.json"
    path.parent.mkdir()
    write_books(path, [])
    return path


@pytest.fixture
def store(books_file):
    return JsonBookStore(books_file)


@pytest.fixture
def mongo_store():
    db = mongomock.MongoClient().bookshelf_test
    ensure_indexes(db)
    return MongoBookStore(db)


@pytest.fixture
def app(books_file):
    class FileTestConfig(TestConfig):
        SECRET_KEY = "test-secret"
        BOOKS_DATA_FILE = str(books_file)

    return create_app(FileTestConfig)


@pytest.fixture
def client(app):
    return app.test_client()
