"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the BookShelf API.

We use SYNCHRONOUS SQLAlchemy with plain `def` route handlers. FastAPI runs
those handlers in its worker thread pool, so a slow query (or a slow bcrypt
hash) suspends only the request that issued it while the event loop keeps
serving other requests.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

Uniqueness (usernames, emails, ISBNs) is enforced by constraints in the
database itself. Application-level pre-checks only produce friendlier
error messages; the constraint is what actually prevents duplicates.
"""

import json
import secrets
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookshelf.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements in debug mode
# - json_serializer: JSON columns keep non-ASCII text as-is, so the genre
#   filter can match the stored text directly


def json_serializer(value) -> str:
    return json.dumps(value, ensure_ascii=False)


engine = create_engine(
    settings.database_url,
    json_serializer=json_serializer,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
    echo=settings.debug,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover models for migrations.
    """
    pass


def generate_id() -> str:
    """
    Generate an opaque document identifier.

    24 lowercase hex characters. Identifiers are assigned once at creation
    and never change.
    """
    return secrets.token_hex(12)


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route handler uses it, and
    the finally block closes it even if the handler raised.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: Session = Depends(get_db)):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def ping(db: Session) -> bool:
    """Return True if the database answers a trivial query."""
    db.execute(text("SELECT 1"))
    return True


def create_tables() -> None:
    """
    Create all database tables.

    Useful for development and tests. In production, use Alembic
    migrations instead.
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! NEVER use in production.
    """
    Base.metadata.drop_all(bind=engine)
