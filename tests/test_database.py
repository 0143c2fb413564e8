"""Tests for engine configuration and session helpers."""

import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from dbrole.database import (
    SessionLocal,
    check_connection,
    create_db_engine,
    get_session,
    get_session_context,
)
from tests.support import Human, Instructor, Student, StudentRole


@pytest.mark.unit
class TestEngine:
    """Tests for create_db_engine."""

    def test_memory_database_shares_one_connection(self) -> None:
        """Test that in-memory SQLite uses a static pool."""
        engine = create_db_engine("sqlite://")

        assert isinstance(engine.pool, StaticPool)
        engine.dispose()

    def test_sqlite_enforces_foreign_keys(self) -> None:
        """Test that SQLite connections enable foreign keys."""
        engine = create_db_engine("sqlite://")
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        engine.dispose()

    def test_check_connection(self, engine) -> None:
        """Test that a reachable database reports healthy."""
        assert check_connection(engine) is True


@pytest.mark.integration
class TestSessionContext:
    """Tests for the unit-of-work helpers."""

    def test_context_commits_both_rows(self, session) -> None:
        """Test that host and role rows are committed together."""
        with get_session_context() as db:
            Student(name="Paul", study_group_id=3).save(db)

        db = SessionLocal()
        student = db.query(Student).filter_by(name="Paul").one()
        assert db.get(StudentRole, student.id).study_group_id == 3

    def test_context_rolls_back_both_rows(self, session) -> None:
        """Test that a failure after the role row is written undoes it too."""
        with pytest.raises(RuntimeError):
            with get_session_context() as db:
                Instructor(name="Paul", rank_id=2).save(db)
                raise RuntimeError("request failed")

        db = SessionLocal()
        assert db.query(Human).filter_by(name="Paul").count() == 0
        assert db.query(Instructor).count() == 0

    def test_generator_dependency_commits(self, session) -> None:
        """Test that the generator dependency commits on normal exhaustion."""
        dependency = get_session()
        db = next(dependency)
        Human(name="Paul").save(db)
        with pytest.raises(StopIteration):
            next(dependency)

        assert SessionLocal().query(Human).filter_by(name="Paul").count() == 1
