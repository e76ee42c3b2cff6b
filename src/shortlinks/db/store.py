from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Protocol

from sqlalchemy import exists, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from shortlinks.core.errors import NotFoundError, StoreError
from shortlinks.db.base import Base
from shortlinks.db.models import ShortUrl

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UrlRecord:
    id: int
    short_code: str
    long_url: str
    times_followed: int
    created_at: datetime


class UrlStore(Protocol):
    """Persistence operations the generator and the link service rely on."""

    def exists(self, code: str) -> bool: ...

    def insert(self, long_url: str, code: str) -> None: ...

    def fetch_by_code(self, code: str) -> UrlRecord: ...

    def increment_follow_count(self, code: str) -> None: ...

    def create_schema(self) -> None: ...

    def close(self) -> None: ...


class SqlUrlStore:
    """
    UrlStore over a single relational table.

    Every SQLAlchemy failure is re-raised as StoreError, the unique
    constraint on short_url included; callers never see driver exceptions.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with self._sessions() as db:
                yield db
        except SQLAlchemyError as exc:
            raise StoreError(f"{action} failed: {exc.__class__.__name__}") from exc

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise StoreError("schema creation failed") from exc

    def close(self) -> None:
        self.engine.dispose()

    def exists(self, code: str) -> bool:
        stmt = select(exists().where(ShortUrl.short_url == code))
        with self._session("existence check") as db:
            return bool(db.scalar(stmt))

    def insert(self, long_url: str, code: str) -> None:
        with self._session("insert") as db:
            db.add(ShortUrl(long_url=long_url, short_url=code))
            db.commit()

    def fetch_by_code(self, code: str) -> UrlRecord:
        with self._session("fetch") as db:
            row = db.scalars(select(ShortUrl).where(ShortUrl.short_url == code)).first()
            if row is None:
                raise NotFoundError(f"no url for code {code!r}")
            return UrlRecord(
                id=row.id,
                short_code=row.short_url,
                long_url=row.long_url,
                times_followed=row.times_followed,
                created_at=row.created_at,
            )

    def increment_follow_count(self, code: str) -> None:
        # single UPDATE so concurrent redirects never lose a count
        stmt = (
            update(ShortUrl)
            .where(ShortUrl.short_url == code)
            .values(times_followed=ShortUrl.times_followed + 1)
        )
        with self._session("increment") as db:
            db.execute(stmt)
            db.commit()
