"""
SQLite-based key-value storage for tracker flags.
This is the primary store: every read is tried here first and every write lands here.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, func
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from is_first_run.errors import StorageReadError, StorageWriteError
from is_first_run.storage.base import Lookup, StoredValue
from is_first_run.storage.models import Base, FlagRecord

logger = logging.getLogger(__name__)


class SQLiteStore:
    """SQLite-backed key-value store built on SQLAlchemy."""

    name = "sqlite"

    def __init__(self: SQLiteStore, db_path: Path, engine: Engine | None = None) -> None:
        """Initialize the store and make sure its table exists.

        Args:
            db_path: Path to the SQLite database file.
            engine: Pre-built engine to use instead of one for ``db_path``.
        """
        self.db_path = db_path
        if engine is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                pool_pre_ping=True,
                connect_args={
                    "check_same_thread": False,  # Reads and writes run in worker threads
                    "timeout": 20,  # 20 second timeout for database locks
                },
            )
        self.engine = engine
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )
        self.init_db()

    def init_db(self) -> None:
        """Create the flags table if it doesn't exist"""
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context manager for database sessions"""
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    async def get(self, key: str) -> Lookup:
        return await asyncio.to_thread(self._get, key)

    async def put(self, key: str, value: StoredValue) -> None:
        await asyncio.to_thread(self._put, key, value)

    def _get(self, key: str) -> Lookup:
        try:
            with self.session() as db:
                record = db.get(FlagRecord, key)
                if record is None:
                    return Lookup.miss(key)
                value = record.value
        except (SQLAlchemyError, ValueError) as e:
            # ValueError covers JSON payloads that no longer decode
            logger.debug("Failed to read %s from %s: %s", key, self.db_path, e)
            return Lookup.failure(StorageReadError(key, str(e), backend=self.name))

        if value is None:
            return Lookup.failure(
                StorageReadError(key, "stored value is null", backend=self.name)
            )
        return Lookup.hit(key, value)

    def _put(self, key: str, value: StoredValue) -> None:
        if not isinstance(value, bool | int | str):
            raise TypeError(f"Unsupported value type for '{key}': {type(value).__name__}")
        # Upsert without loading the old row, whose payload may no longer decode
        stmt = insert(FlagRecord).values(key=key, value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[FlagRecord.key],
            set_={"value": stmt.excluded["value"], "updated_at": func.now()},
        )
        try:
            with self.session() as db:
                db.execute(stmt)
        except (SQLAlchemyError, OSError, ValueError) as e:
            logger.error("Failed to write %s to %s: %s", key, self.db_path, e)
            raise StorageWriteError(key, str(e), backend=self.name) from e

    async def delete(self, key: str) -> None:
        """Delete a stored value."""
        await asyncio.to_thread(self._delete, key)

    def _delete(self, key: str) -> None:
        try:
            with self.session() as db:
                db.query(FlagRecord).filter(FlagRecord.key == key).delete()
        except SQLAlchemyError as e:
            logger.error("Failed to delete %s from %s: %s", key, self.db_path, e)
            raise StorageWriteError(key, str(e), backend=self.name) from e

    async def get_all(self) -> dict[str, Any]:
        """Get all stored values as a dictionary."""
        return await asyncio.to_thread(self._get_all)

    def _get_all(self) -> dict[str, Any]:
        with self.session() as db:
            return {record.key: record.value for record in db.query(FlagRecord).all()}

    def dispose(self) -> None:
        """Release pooled connections held by the engine."""
        self.engine.dispose()
