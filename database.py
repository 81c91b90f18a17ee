"""
Database helpers: engine, session factory and the declarative base.
"""
import contextlib
import functools
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config import DATABASE_URL, SQL_ECHO


class Base(DeclarativeBase):
    """Base class for all ORM models"""
    pass


def build_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=SQL_ECHO, **kwargs)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless asked per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


def init_db(bind: Engine = engine) -> None:
    """Create missing tables."""
    import models  # noqa: F401  registers the mappers on Base.metadata

    Base.metadata.create_all(bind=bind)


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


UNIT_OF_WORK = "unit_of_work"


def transactional(method):
    """Run a service method as one unit of work on ``self.db``.

    Commits when the method returns and rolls back on any exception, which
    is then re-raised unchanged. Inside ``unit_of_work`` the enclosing block
    owns the commit instead.
    """
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self.db.info.get(UNIT_OF_WORK):
            return method(self, *args, **kwargs)
        try:
            result = method(self, *args, **kwargs)
            self.db.commit()
            return result
        except Exception:
            self.db.rollback()
            raise
    return wrapper


@contextlib.contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Group several ``@transactional`` calls into a single commit.

    Nothing is committed until the block exits; any exception rolls back
    everything done inside it.
    """
    db.info[UNIT_OF_WORK] = True
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.info.pop(UNIT_OF_WORK, None)
