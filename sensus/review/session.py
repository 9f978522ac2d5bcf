"""Review database session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from sensus.exceptions import ReviewStoreError
from sensus.review.models import ReviewBase

log = logging.getLogger(__name__)

# SQLite WAL-mode companions that belong to a database file
_SIDECAR_SUFFIXES = ("-wal", "-shm")


def get_review_engine(db_path: Path) -> Engine:
    """Create SQLAlchemy engine for the review database."""
    return create_engine(
        f"sqlite:///{db_path}",
        connect_args={
            "timeout": 30,
            "check_same_thread": False,
        },
    )


def _prepare_engine(db_path: Path) -> Engine:
    """Create the database file and tables if needed."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = get_review_engine(db_path)
    try:
        ReviewBase.metadata.create_all(engine)

        # Enable WAL mode for better concurrent access
        with engine.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.commit()
    except Exception:
        engine.dispose()
        raise
    return engine


def _is_corrupt(exc: Exception) -> bool:
    msg = str(exc).lower()
    return "malformed" in msg or "corrupt" in msg or "not a database" in msg


@contextmanager
def get_review_session(db_path: Path) -> Generator[Session, None, None]:
    """Create a session for the review database.

    Auto-creates the parent directory and tables on first use. A corrupt
    database file is moved aside to ``<name>.corrupt`` and a fresh one is
    created in its place.

    Args:
        db_path: Path to the SQLite review database.

    Yields:
        SQLAlchemy Session; committed on success, rolled back on error.

    Raises:
        ReviewStoreError: If the database cannot be opened or written.
    """
    db_path = db_path.expanduser()
    try:
        engine = _prepare_engine(db_path)
    except SQLAlchemyError as exc:
        if not _is_corrupt(exc):
            raise ReviewStoreError(db_path, str(exc)) from exc
        backup = db_path.with_name(db_path.name + ".corrupt")
        log.warning("Review database appears corrupt, moving to %s: %s", backup, exc)
        db_path.replace(backup)
        for suffix in _SIDECAR_SUFFIXES:
            sidecar = db_path.with_name(db_path.name + suffix)
            if sidecar.exists():
                sidecar.replace(backup.with_name(backup.name + suffix))
        engine = _prepare_engine(db_path)

    session = sessionmaker(bind=engine)()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise ReviewStoreError(db_path, str(exc)) from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
