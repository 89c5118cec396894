"""Core test fixtures for world map tests."""

import random

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from worldmap.database.models.base import Base
from worldmap.graph.layout import LayoutConfig, LayoutEngine
from worldmap.graph.merger import FactMerger
from worldmap.graph.schemas import World
from worldmap.render.surface import RecordingSurface


@pytest.fixture(scope="session")
def engine():
    """Create SQLite in-memory engine for fast tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    # Import all models to ensure they're registered with Base
    from worldmap.database.models import world_slot  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(scope="function")
def db_session(engine) -> Session:
    """Create a fresh database session for each test.

    Uses a transaction that rolls back after each test for isolation.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session_factory = sessionmaker(bind=connection)
    session = session_factory()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def world() -> World:
    """An empty world."""
    return World.empty()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible layouts."""
    return random.Random(1234)


@pytest.fixture
def layout_engine(rng: random.Random) -> LayoutEngine:
    """Layout engine with default constants and a seeded random source."""
    return LayoutEngine(config=LayoutConfig(), rng=rng)


@pytest.fixture
def merger(layout_engine: LayoutEngine) -> FactMerger:
    """In-memory merger (no persistence)."""
    return FactMerger(layout_engine=layout_engine)


@pytest.fixture
def surface() -> RecordingSurface:
    """Drawing surface that records calls."""
    return RecordingSurface()
