from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from db import init_db, make_engine, make_session_factory
from domain.errors import NotFoundError, StorageError
from domain.models import BookFields
from repositories import BooksRepository, InMemoryCatalogStore

DUNE = BookFields(title="Dune", price=15.99, genre="Sci-Fi")


def test_insert_and_get(catalog):
    book_id = catalog.insert(DUNE, "alice")

    book = catalog.get(book_id)
    assert book.id == book_id
    assert (book.title, book.price, book.genre) == ("Dune", 15.99, "Sci-Fi")
    assert book.created_by == "alice"
    assert book.updated_by is None
    assert book.created_at == book.updated_at
    assert book.image_key is None


def test_get_missing_raises_not_found(catalog):
    with pytest.raises(NotFoundError):
        catalog.get("missing")


def test_update_overwrites_fields(catalog):
    book_id = catalog.insert(DUNE, "alice")

    catalog.update(book_id, BookFields("Dune Messiah", 9.0, "Sci-Fi"), "bob")

    book = catalog.get(book_id)
    assert book.title == "Dune Messiah"
    assert book.price == 9.0
    assert book.updated_by == "bob"
    assert book.updated_at > book.created_at


def test_update_missing_raises_not_found(catalog):
    with pytest.raises(NotFoundError):
        catalog.update("missing", DUNE, "bob")


def test_set_image_and_update_keep_key(catalog):
    book_id = catalog.insert(DUNE, "alice")
    catalog.set_image(book_id, book_id, "bob")
    catalog.update(book_id, DUNE, "carol")

    assert catalog.get(book_id).image_key == book_id


def test_set_image_missing_raises_not_found(catalog):
    with pytest.raises(NotFoundError):
        catalog.set_image("missing", "missing", "bob")


def test_list_orders_by_created_desc(catalog):
    ids = [catalog.insert(BookFields(f"T{i}", i, "g"), "alice") for i in range(3)]
    assert [b.id for b in catalog.list()] == list(reversed(ids))


def test_list_breaks_ties_by_insertion_order(memory_catalog, sql_catalog):
    fixed = datetime(2025, 1, 1)
    for store in (memory_catalog, sql_catalog):
        store._clock = lambda: fixed
        ids = [store.insert(BookFields(f"T{i}", i, "g"), "alice") for i in range(3)]
        assert [b.id for b in store.list()] == list(reversed(ids))


def test_updated_at_never_moves_backwards(catalog):
    book_id = catalog.insert(DUNE, "alice")
    created = catalog.get(book_id).created_at
    catalog._clock = lambda: created - timedelta(hours=1)

    catalog.update(book_id, DUNE, "bob")

    assert catalog.get(book_id).updated_at >= created


def test_delete(catalog):
    book_id = catalog.insert(DUNE, "alice")
    other = catalog.insert(DUNE, "alice")

    catalog.delete(book_id)

    with pytest.raises(NotFoundError):
        catalog.get(book_id)
    assert [b.id for b in catalog.list()] == [other]


def test_memory_store_returns_copies():
    store = InMemoryCatalogStore()
    book_id = store.insert(DUNE, "alice")
    store.get(book_id).title = "changed"
    assert store.get(book_id).title == "Dune"


def test_sql_errors_become_storage_errors(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    init_db(engine)
    repo = BooksRepository(make_session_factory(engine))

    with patch("sqlalchemy.orm.Session.commit", side_effect=OperationalError("stmt", {}, Exception("locked"))):
        with pytest.raises(StorageError) as excinfo:
            repo.insert(DUNE, "alice")
    assert isinstance(excinfo.value.__cause__, OperationalError)
    assert repo.list() == []


def test_sql_store_persists_across_repositories(tmp_path):
    url = f"sqlite:///{tmp_path / 'catalog.db'}"
    engine = make_engine(url)
    init_db(engine)
    book_id = BooksRepository(make_session_factory(engine)).insert(DUNE, "alice")

    other = BooksRepository(make_session_factory(make_engine(url)))
    assert other.get(book_id).title == "Dune"
