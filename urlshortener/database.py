from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def database_url(location: str) -> URL:
    """Turn a storage location into a SQLAlchemy URL.

    Anything containing ``://`` is taken as a full URL (e.g. a PostgreSQL DSN);
    everything else is a SQLite file path.
    """
    if "://" in location:
        return make_url(location)
    # built from parts so "?" and "#" in a path stay part of the file name
    return URL.create("sqlite", database=str(Path(location).expanduser()))


def create_engine_for(location: str) -> Engine:
    url = database_url(location)
    if url.get_backend_name() != "sqlite":
        return create_engine(
            url,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,
        )

    if "://" not in location:
        # SQLite creates the file but not its directory
        Path(location).expanduser().parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        url,
        connect_args={"check_same_thread": False},  # sessions are used from FastAPI's thread pool
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
