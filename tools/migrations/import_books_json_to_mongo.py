from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from pymongo import MongoClient
from pymongo.server_api import ServerApi

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from bookshelf.storage import BookStoreError, JsonBookStore, MongoBookStore, ensure_indexes  # noqa: E402


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Copy data/books.json into the MongoDB book store")
    parser.add_argument(
        "--input",
        default=os.getenv("BOOKS_DATA_FILE", str(ROOT_DIR / "data" / "books.json")),
        help="Path to source books JSON file",
    )
    parser.add_argument("--mongo-uri", default=os.getenv("MONGODB_URI", ""), help="MongoDB connection URI")
    parser.add_argument(
        "--db-name",
        default=os.getenv("MONGODB_DB_NAME", "bookshelf"),
        help="MongoDB database name",
    )
    parser.add_argument("--dry-run", action="store_true", help="Validate and report without writing")
    return parser.parse_args(argv)


def import_books(source: JsonBookStore, target: MongoBookStore, dry_run: bool = False) -> dict:
    books = source.load()
    existing = target.load()

    missing_ids = sum(1 for book in books if not isinstance(book, dict) or "id" not in book)
    if not dry_run:
        target.save(books)

    return {
        "source_rows": len(books),
        "replaced_rows": len(existing),
        "missing_ids": missing_ids,
        "dry_run": dry_run,
    }


def main(argv=None):
    args = parse_args(argv)

    if not args.mongo_uri:
        raise SystemExit("Missing --mongo-uri or MONGODB_URI")

    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")

    client = MongoClient(args.mongo_uri, server_api=ServerApi("1"))
    client.admin.command("ping")
    db = client[args.db_name]
    ensure_indexes(db)

    try:
        summary = import_books(JsonBookStore(input_path), MongoBookStore(db), dry_run=args.dry_run)
    except BookStoreError as exc:
        raise SystemExit(f"Import failed: {exc}") from exc

    print("Import complete")
    for key, value in summary.items():
        print(f"- {key}: {value}")


if __name__ == "__main__":
    main()
