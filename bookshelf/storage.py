from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from pymongo import ASCENDING
from pymongo.errors import PyMongoError


class BookStoreError(RuntimeError):
    pass


class JsonBookStore:
    """Whole-collection persistence in a single JSON file.

    Every ``load`` re-reads the file and every ``save`` rewrites it; nothing
    is cached between calls.
    """

    backend = "json"

    def __init__(self, path):
        self.path = Path(path)

    def ensure_exists(self) -> bool:
        """Create the parent directory and an empty collection if missing.

        Returns ``True`` when a new file was written.
        """
        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.save([])
        return True

    def load(self) -> list[dict[str, Any]]:
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                books = json.load(handle)
        except FileNotFoundError as exc:
            raise BookStoreError(f"Books file not found: {self.path}") from exc
        except UnicodeDecodeError as exc:
            raise BookStoreError(f"Books file is not valid UTF-8: {self.path}") from exc
        except json.JSONDecodeError as exc:
            raise BookStoreError(f"Books file is not valid JSON: {self.path}") from exc
        except OSError as exc:
            raise BookStoreError(f"Unable to read books file {self.path}: {exc}") from exc

        if not isinstance(books, list):
            raise BookStoreError(f"Books file must hold a JSON array: {self.path}")
        return books

    def save(self, books: list[dict[str, Any]]) -> None:
        # Write-then-rename so a failed write never truncates the collection.
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(books, handle, indent=2, ensure_ascii=False)
            if self.path.exists():
                os.chmod(tmp_path, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as exc:
            raise BookStoreError(f"Unable to write books file {self.path}: {exc}") from exc
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)


class MongoBookStore:
    """Same load/save contract backed by a MongoDB collection.

    Each book is one document; ``position`` keeps the collection order and
    ``save`` replaces every document so the whole-collection overwrite
    semantics hold.
    """

    backend = "mongodb"

    def __init__(self, db):
        self.collection = db.books

    def load(self) -> list[dict[str, Any]]:
        try:
            docs = list(self.collection.find({}, {"_id": 0}).sort("position", ASCENDING))
        except PyMongoError as exc:
            raise BookStoreError(f"Unable to read books from MongoDB: {exc}") from exc

        for doc in docs:
            doc.pop("position", None)
        return docs

    def save(self, books: list[dict[str, Any]]) -> None:
        docs = [{**book, "position": index} for index, book in enumerate(books)]
        try:
            self.collection.delete_many({})
            if docs:
                self.collection.insert_many(docs)
        except PyMongoError as exc:
            raise BookStoreError(f"Unable to write books to MongoDB: {exc}") from exc


def ensure_indexes(db):
    db.books.create_index([("position", ASCENDING)])
