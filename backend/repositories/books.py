"""
Book repository backed by SQLAlchemy/SQLite.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.errors import NotFoundError, StorageError
from domain.models import Book, BookFields
from repositories.models import BookORM

logger = logging.getLogger(__name__)


def _book_from_orm(orm: BookORM) -> Book:
    return Book(
        id=orm.id,
        title=orm.title,
        price=orm.price,
        genre=orm.genre,
        created_at=orm.created_at,
        updated_at=orm.updated_at,
        created_by=orm.created_by,
        updated_by=orm.updated_by,
        image_key=orm.image_key,
    )


def _touch(orm: BookORM, now: datetime, actor: str) -> None:
    # updated_at never moves backwards, even if the clock does
    orm.updated_at = max(now, orm.updated_at or now, orm.created_at or now)
    orm.updated_by = actor


class BooksRepository:
    """Catalog store operations for books, one session per call."""

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                session.rollback()
                logger.exception("catalog %s failed", action)
                raise StorageError(f"catalog {action} failed") from e

    def _get_orm(self, session: Session, book_id: str) -> BookORM:
        orm = session.query(BookORM).filter(BookORM.id == book_id).first()
        if not orm:
            raise NotFoundError(book_id)
        return orm

    def insert(self, fields: BookFields, actor: str) -> str:
        now = self._clock()
        book_id = Book.generate_id()
        with self._session("insert") as session:
            orm = BookORM(
                id=book_id,
                title=fields.title,
                price=fields.price,
                genre=fields.genre,
                created_at=now,
                updated_at=now,
                created_by=actor,
            )
            session.add(orm)
            session.commit()
        return book_id

    def update(self, book_id: str, fields: BookFields, actor: str) -> None:
        with self._session("update") as session:
            orm = self._get_orm(session, book_id)
            orm.title = fields.title
            orm.price = fields.price
            orm.genre = fields.genre
            _touch(orm, self._clock(), actor)
            session.add(orm)
            session.commit()

    def set_image(self, book_id: str, image_key: str, actor: str) -> None:
        with self._session("set_image") as session:
            orm = self._get_orm(session, book_id)
            orm.image_key = image_key
            _touch(orm, self._clock(), actor)
            session.add(orm)
            session.commit()

    def get(self, book_id: str) -> Book:
        with self._session("get") as session:
            return _book_from_orm(self._get_orm(session, book_id))

    def list(self) -> List[Book]:
        with self._session("list") as session:
            books = (
                session.query(BookORM)
                .order_by(BookORM.created_at.desc(), BookORM.seq.desc())
                .all()
            )
            return [_book_from_orm(b) for b in books]

    def delete(self, book_id: str) -> None:
        with self._session("delete") as session:
            session.query(BookORM).filter(BookORM.id == book_id).delete()
            session.commit()
