"""Engine and sessions for the world map store."""

from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Iterator

from sqlalchemy import Connection, Engine, create_engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from worldmap.config import settings
from worldmap.database.models import Base


@lru_cache
def get_engine() -> Engine:
    """Engine for settings.database_url, created on first use."""
    url = make_url(settings.database_url)
    options: dict[str, Any] = {"echo": settings.debug}
    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return create_engine(url, **options)


@lru_cache
def _session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False)


def ensure_schema(bind: Engine | Connection) -> None:
    """Create the world map tables on this bind if they are missing."""
    Base.metadata.create_all(bind=bind)


@contextmanager
def get_db_session() -> Iterator[Session]:
    """One unit of work: commit on success, roll back on error.

    Usage:
        with get_db_session() as db:
            world = WorldStateManager(db).load()
    """
    session = _session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
