from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import InternalError
from app.core.logger import Logger

logger = Logger.get_logger(__name__)


class Base(DeclarativeBase):
    pass


def _configure_sqlite_connection(dbapi_connection, connection_record):
    # pysqlite defers BEGIN until the first write; take over transaction control
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_sqlite_transaction(conn):
    # take the write lock up front so a read-check-write sequence cannot interleave
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(url: str, isolation_level: str | None = None, echo: bool = False) -> Engine:
    kwargs = {"echo": echo}

    if url.startswith("sqlite"):
        # isolation comes from BEGIN IMMEDIATE, not the dialect setting
        kwargs["connect_args"] = {"check_same_thread": False}
        # in-memory databases only live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
        if isolation_level:
            kwargs["isolation_level"] = isolation_level

    eng = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        event.listen(eng, "connect", _configure_sqlite_connection)
        event.listen(eng, "begin", _begin_sqlite_transaction)
    return eng


def make_sessionmaker(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


engine = make_engine(
    settings.DATABASE_URL,
    isolation_level=settings.DB_ISOLATION_LEVEL,
    echo=settings.DB_ECHO,
)
SessionLocal = make_sessionmaker(engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session, action: str = "save changes") -> Iterator[Session]:
    """
    Run a block of writes as one unit: commit on success, roll everything
    back on any error. Store failures surface as InternalError.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Could not {action}, transaction rolled back")
        raise InternalError(f"Failed to {action}.") from exc
    except Exception:
        db.rollback()
        raise
