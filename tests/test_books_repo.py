import pytest

from bookshelf.repositories import books_repo
from bookshelf.repositories.books_repo import BooksRepository
from conftest import read_books, write_books

SEVEN = {"id": 7, "title": "T1", "author": "A1", "cost": 10, "shoppingUrl": "u1"}


@pytest.fixture
def repo(store):
    return BooksRepository(store)


@pytest.fixture
def seeded(books_file):
    write_books(books_file, [SEVEN])
    return books_file


def freeze_clock(monkeypatch, *ticks):
    values = iter(ticks)
    monkeypatch.setattr(books_repo, "now_millis", lambda: next(values))


def test_create_on_empty_collection_then_list(books_file, repo):
    created = repo.create_book("Dune", "Herbert", 15, "http://x")

    books = repo.list_books()
    assert books == [created]
    assert books[0]["title"] == "Dune"
    assert books[0]["author"] == "Herbert"
    assert books[0]["cost"] == 15
    assert books[0]["shoppingUrl"] == "http://x"
    assert isinstance(books[0]["id"], int)
    assert read_books(books_file) == [created]


def test_create_uses_millisecond_clock_for_id(monkeypatch, repo):
    freeze_clock(monkeypatch, 1700000000000)

    created = repo.create_book("Dune", "Herbert", 15, "http://x")

    assert created["id"] == 1700000000000


def test_creates_on_distinct_clock_ticks_get_distinct_ids(monkeypatch, repo):
    freeze_clock(monkeypatch, 1700000000000, 1700000000001)

    first = repo.create_book("One", "A", 1, "u")
    second = repo.create_book("Two", "B", 2, "v")

    assert first["id"] != second["id"]
    assert [book["id"] for book in repo.list_books()] == [first["id"], second["id"]]


def test_creates_within_same_millisecond_collide(monkeypatch, repo):
    # Known limitation: timestamp ids are not unique within one clock tick.
    freeze_clock(monkeypatch, 1700000000000, 1700000000000)

    first = repo.create_book("One", "A", 1, "u")
    second = repo.create_book("Two", "B", 2, "v")

    assert first["id"] == second["id"]
    assert repo.get_by_id(first["id"])["title"] == "One"


def test_create_appends_to_existing_collection(seeded, repo):
    created = repo.create_book("Dune", "Herbert", "15", "http://x")

    assert repo.list_books() == [SEVEN, created]


def test_create_stores_fields_without_validation(repo):
    created = repo.create_book("", None, "not a number", "nope")

    assert repo.get_by_id(created["id"]) == {
        "id": created["id"],
        "title": "",
        "author": None,
        "cost": "not a number",
        "shoppingUrl": "nope",
    }


def test_get_by_id_returns_match(seeded, repo):
    assert repo.get_by_id(7) == SEVEN


def test_get_by_id_returns_first_match_on_duplicate_ids(books_file, repo):
    write_books(books_file, [SEVEN, {**SEVEN, "title": "Shadowed"}])

    assert repo.get_by_id(7)["title"] == "T1"


def test_update_replaces_fields_and_keeps_id(seeded, repo):
    updated = repo.update_book(7, "T2", "A2", 20, "u2")

    assert updated == {"id": 7, "title": "T2", "author": "A2", "cost": 20, "shoppingUrl": "u2"}
    assert repo.get_by_id(7) == updated


def test_update_replaces_rather_than_merges(books_file, repo):
    write_books(books_file, [{**SEVEN, "notes": "extra"}])

    updated = repo.update_book(7, "T2", "A2", 20, "u2")

    assert "notes" not in updated
    assert read_books(books_file) == [updated]


def test_update_keeps_position_in_collection(books_file, repo):
    others = [{**SEVEN, "id": 1}, SEVEN, {**SEVEN, "id": 9}]
    write_books(books_file, others)

    repo.update_book(7, "T2", "A2", 20, "u2")

    assert [book["id"] for book in repo.list_books()] == [1, 7, 9]
    assert repo.list_books()[1]["title"] == "T2"


def test_delete_removes_and_returns_book(seeded, repo):
    deleted = repo.delete_book(7)

    assert deleted == SEVEN
    assert repo.list_books() == []
    assert read_books(seeded) == []


def test_delete_unknown_id_leaves_collection_unchanged(seeded, repo):
    before = seeded.read_text(encoding="utf-8")

    assert repo.delete_book(9) is None

    assert repo.list_books() == [SEVEN]
    assert seeded.read_text(encoding="utf-8") == before


@pytest.mark.parametrize(
    "operation",
    [
        lambda repo: repo.get_by_id(42),
        lambda repo: repo.update_book(42, "T", "A", 1, "u"),
        lambda repo: repo.delete_book(42),
    ],
)
def test_missing_id_returns_none_without_writing(monkeypatch, seeded, store, operation):
    calls = []
    monkeypatch.setattr(store, "save", calls.append)

    assert operation(BooksRepository(store)) is None

    assert calls == []
    assert read_books(seeded) == [SEVEN]


def test_count_books(seeded, repo):
    assert repo.count_books() == 1


def test_repository_works_against_mongo_store(mongo_store):
    repo = BooksRepository(mongo_store)
    mongo_store.save([SEVEN])

    assert repo.update_book(7, "T2", "A2", 20, "u2")["id"] == 7
    assert repo.delete_book(9) is None
    assert repo.get_by_id(7)["title"] == "T2"
    assert repo.delete_book(7)["title"] == "T2"
    assert repo.list_books() == []


def test_non_object_entries_never_match(books_file, repo):
    write_books(books_file, [1, "7", None, SEVEN])

    assert repo.get_by_id(7) == SEVEN
    assert repo.get_by_id(1) is None
    assert repo.update_book(7, "T2", "A2", 20, "u2")["title"] == "T2"
    assert repo.delete_book(7)["title"] == "T2"
    assert read_books(books_file) == [1, "7", None]
