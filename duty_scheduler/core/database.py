# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine factory and table definitions for the SQL store."""
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

metadata = MetaData()

team_members = Table(
    "team_members",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("priority", Integer, nullable=False),
    Column("color", String(32), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("access_key", String(255), nullable=False, unique=True),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(100), nullable=False),
    Column("date", String(10), nullable=False),
    Column("month", String(7), nullable=False, index=True),
    Column("is_confirmed", Boolean, nullable=False, default=False),
    Column("is_conflicted", Boolean, nullable=False, default=False),
    UniqueConstraint("user_id", "date", name="uq_bookings_user_date"),
)

final_schedule = Table(
    "final_schedule",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("date", String(10), nullable=False, unique=True),
    Column("assigned_to", String(100), nullable=False),
    Column("month", String(7), nullable=False, index=True),
)

tickets = Table(
    "tickets",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("date", String(10), nullable=False, index=True),
    Column("ticket_ids", JSON, nullable=False),
    Column("priority", String(2), nullable=False),
    Column("status", String(20), nullable=False),
    Column("notes", Text, nullable=True),
    Column("created_by", String(100), nullable=False),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=True),
)


def build_engine(url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if url == "sqlite://" or (url.startswith("sqlite") and ":memory:" in url):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


def init_schema(engine: Engine) -> None:
    metadata.create_all(engine)


class TransactionScope:
    """
    Hands out connections for the SQL repositories.

    Outside a unit of work, ``begin()`` opens its own transaction and
    ``connect()`` a plain connection. Inside ``transaction()`` both yield the
    unit's connection, so every repository call on this thread joins one
    transaction that commits or rolls back as a whole.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._local = threading.local()

    def _bound(self) -> Optional[Connection]:
        return getattr(self._local, "conn", None)

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        bound = self._bound()
        if bound is not None:
            yield bound
            return
        with self.engine.connect() as conn:
            yield conn

    @contextmanager
    def begin(self) -> Iterator[Connection]:
        bound = self._bound()
        if bound is not None:
            yield bound
            return
        with self.engine.begin() as conn:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Bind one transaction to this thread; nested calls join it."""
        bound = self._bound()
        if bound is not None:
            yield bound
            return
        with self.engine.begin() as conn:
            self._local.conn = conn
            try:
                yield conn
            finally:
                self._local.conn = None
