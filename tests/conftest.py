"""Shared pytest fixtures and configuration.

Every test gets a fresh in-memory SQLite database bound to the
request-scoped session registry, seeded with two students and one
instructor on the shared 'humans' table.
"""

from collections.abc import Generator

import pytest
from sqlalchemy import insert
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from dbrole.database import SessionLocal, configure_database, create_db_engine, init_db

# Import support models to register them with Base.metadata
from tests.support import Human  # noqa: F401


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Provide an empty in-memory database with all tables created."""
    engine = create_db_engine("sqlite://", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    """Provide the registry session bound to the test database, seeded."""
    configure_database(engine)
    db = SessionLocal()
    db.execute(
        insert(Human.__table__),
        [
            {"name": "Mark", "address": "Wall Street", "role": "student"},
            {"name": "Michael", "address": "1st Avenue", "role": "student"},
            {"name": "John", "address": "2st Avenue", "role": "instructor"},
        ],
    )
    db.commit()
    yield db
    db.rollback()
    SessionLocal.remove()
