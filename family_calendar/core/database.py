"""Database configuration and session management.

The event store is relational and reached only through SQLModel sessions.
SQLite is the default backend; any SQLAlchemy URL can be supplied through
``DATABASE_URL``.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Lets family members read the calendar
      while another request is writing an event.

    - **Foreign Keys**: Disabled by default in SQLite. Enabled so that an
      Event cannot reference a missing user or family.

    - **check_same_thread=False**: FastAPI may hand a session to a different
      worker thread than the one that opened the connection.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from family_calendar.core.config import settings

connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    if not settings.database_url.startswith("sqlite"):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
