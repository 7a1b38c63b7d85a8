"""SQL-backed store for alias -> URL mappings.

Every public method either returns the requested value or raises one of the
``StoreError`` subclasses from ``urlshortener.exceptions``; SQLAlchemy and
driver exceptions never escape this module unwrapped.

Uniqueness of aliases is enforced by the database's unique index, not by a
read-before-write check, so two concurrent saves of the same alias cannot
both succeed. Each operation runs in its own short-lived session, which makes
a single ``AliasStore`` safe to share between request threads.

Example:
    >>> store = AliasStore.open("./storage/storage.db")
    >>> store.save("https://example.com", "abc123")
    1
    >>> store.lookup("abc123")
    'https://example.com'
    >>> store.delete("abc123")
"""

import functools
import logging

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from urlshortener.database import Base, create_engine_for, make_session_factory
from urlshortener.exceptions import (
    AliasConflictError,
    AliasNotFoundError,
    InvalidMappingError,
    StoreUnavailableError,
)
from urlshortener.models import URLMapping

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL and most other servers)
UNIQUE_VIOLATION_SQLSTATE = "23505"


def handle_database_error(method):
    """Re-raise SQLAlchemy failures from a store method as StoreUnavailableError."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"{method.__name__} failed: {exc.__class__.__name__}") from exc

    return wrapper


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell whether an IntegrityError comes from a unique constraint.

    Drivers report this differently: sqlite3 exposes an extended error name,
    psycopg and asyncpg a SQLSTATE, and older drivers only a message.
    """
    orig = exc.orig
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    for attr in ("pgcode", "sqlstate"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    message = str(orig).lower()
    return "unique constraint failed" in message or "duplicate key" in message


class AliasStore:
    """Durable alias -> URL mapping with database-enforced uniqueness.

    Build one with ``AliasStore.open(location)`` at startup and share it for
    the lifetime of the process.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessions = make_session_factory(engine)

    @classmethod
    def open(cls, location: str) -> "AliasStore":
        """Open (or create) the store at ``location`` and ensure its schema.

        Safe to call repeatedly against the same location.

        Raises:
            StoreUnavailableError: if the location cannot be opened or the
                schema cannot be created.
        """
        try:
            engine = create_engine_for(location)
            Base.metadata.create_all(bind=engine)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError(f"cannot open storage at {location!r}") from exc
        logger.debug("Opened alias store at %s", engine.url.render_as_string(hide_password=True))
        return cls(engine)

    @handle_database_error
    def save(self, target_url: str, alias: str) -> int:
        """Insert a new mapping and return its id.

        Raises:
            InvalidMappingError: if ``alias`` or ``target_url`` is empty.
            AliasConflictError: if ``alias`` is already mapped.
            StoreUnavailableError: on any other database failure.
        """
        if not alias:
            raise InvalidMappingError("alias must not be empty")
        if not target_url:
            raise InvalidMappingError("url must not be empty")

        with self._sessions() as session:
            mapping = URLMapping(alias=alias, target_url=target_url)
            session.add(mapping)
            try:
                session.flush()
                mapping_id = mapping.id
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if is_unique_violation(exc):
                    raise AliasConflictError(alias) from exc
                raise
        logger.debug("Saved alias %s as id %s", alias, mapping_id)
        return mapping_id

    @handle_database_error
    def lookup(self, alias: str) -> str:
        """Return the URL mapped to ``alias``.

        Raises:
            AliasNotFoundError: if there is no such mapping.
            StoreUnavailableError: on database failure.
        """
        with self._sessions() as session:
            target_url = session.scalar(select(URLMapping.target_url).where(URLMapping.alias == alias))
        if target_url is None:
            raise AliasNotFoundError(alias)
        return target_url

    @handle_database_error
    def delete(self, alias: str) -> None:
        """Remove the mapping for ``alias``; a missing alias is not an error."""
        with self._sessions() as session:
            result = session.execute(delete(URLMapping).where(URLMapping.alias == alias))
            session.commit()
        logger.debug("Deleted alias %s (%d row(s))", alias, result.rowcount)

    def close(self) -> None:
        self.engine.dispose()
