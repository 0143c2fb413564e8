# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration read from the environment
- A request-scoped session registry used by the active-record models
- Connection utilities

Usage:
     from dbrole.database import get_session_context

     with get_session_context() as db:
          student = db.get(Student, 1)
          student.study_group_id = 14
          student.save(db)
"""
import logging
import os
from contextlib import contextmanager
from typing import Generator, Optional, Union

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Database configuration from environment
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"


def _is_memory_sqlite(url: str) -> bool:
     return url.startswith("sqlite") and (url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:") or ":memory:" in url)


def create_db_engine(url: str = DATABASE_URL, echo: bool = SQL_ECHO) -> Engine:
     """
     Create an engine for the given URL.

     In-memory SQLite databases live on a single shared connection,
     otherwise every checkout would see an empty database.
     """
     if _is_memory_sqlite(url):
          engine = create_engine(
               url,
               poolclass=StaticPool,
               connect_args={"check_same_thread": False},
               echo=echo,
          )
     else:
          engine = create_engine(
               url,
               pool_pre_ping=True,
               pool_recycle=1800,  # Recycle connections after 30 minutes
               echo=echo,
          )

     if engine.dialect.name == "sqlite":
          @event.listens_for(engine, "connect")
          def receive_connect(dbapi_conn, connection_record):
               """SQLite ships with foreign key enforcement off."""
               cursor = dbapi_conn.cursor()
               cursor.execute("PRAGMA foreign_keys=ON")
               cursor.close()

     return engine


# Create SQLAlchemy engine
engine = create_db_engine()

# Session registry, one session per thread of execution
SessionLocal = scoped_session(
     sessionmaker(
          bind=engine,
          autoflush=False,
          expire_on_commit=False,
     )
)


def configure_database(bind: Union[Engine, str]) -> Engine:
     """
     Point the session registry at another engine (or URL).

     The current scoped session is discarded first so the next
     SessionLocal() call is bound to the new engine.
     """
     if isinstance(bind, str):
          bind = create_db_engine(bind)
     SessionLocal.remove()
     SessionLocal.configure(bind=bind)
     logger.debug("Session registry bound to %s", bind.url)
     return bind


def get_session() -> Generator[Session, None, None]:
     """
     Generator that provides a database session and commits once it is
     exhausted.

     Usage:
          sessions = get_session()
          db = next(sessions)
          Student(name="Paul").save(db)
          next(sessions, None)  # commits and closes

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


@contextmanager
def get_session_context() -> Generator[Session, None, None]:
     """
     Context manager for a unit of work.

     Host and role rows written inside the block are committed together,
     or rolled back together when the block raises.

     Usage:
          with get_session_context() as db:
               Student(name="Mark", study_group_id=12).save(db)

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def init_db(bind: Optional[Engine] = None) -> None:
     """
     Initialize database tables.

     Creates all tables defined in the models if they don't exist.
     Schema migrations are out of scope for this package.
     """
     from .models import Base
     Base.metadata.create_all(bind=bind or engine)


def check_connection(bind: Optional[Engine] = None) -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with (bind or engine).connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception as e:
          logger.warning("Database connection failed: %s", e)
          return False
