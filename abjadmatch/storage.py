"""Compatibility result stores.

Routers depend on the `CompatibilityStore` interface only; `build_store`
picks the backend from settings at startup.
"""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from . import models
from .abjad_engine import CompatibilityComputation
from .config import Settings
from .database import SessionLocal, create_tables, session_scope
from .errors import StorageError

logger = logging.getLogger("abjadmatch.storage")


@dataclass(frozen=True)
class CompatibilityRecord:
    id: int
    created_at: datetime
    partner1_name: str
    partner2_name: str
    partner1_date_of_birth: str | None
    partner1_birth_time: str | None
    partner2_date_of_birth: str | None
    partner2_birth_time: str | None
    partner1_abjad_value: int
    partner2_abjad_value: int
    partner1_digital_root: int
    partner2_digital_root: int
    partner1_element: str
    partner2_element: str
    name_compatibility_score: int
    life_path_compatibility_score: int | None
    overall_compatibility_score: int
    compatibility_level: str
    insights: str
    marriage_advice: str

    @classmethod
    def from_computation(
        cls, record_id: int, created_at: datetime, computation: CompatibilityComputation
    ) -> CompatibilityRecord:
        return cls(id=record_id, created_at=created_at, **computation.to_dict())

    def to_dict(self) -> dict:
        return asdict(self)


def _newest_first(record: CompatibilityRecord) -> tuple[datetime, int]:
    return record.created_at, record.id


class CompatibilityStore(ABC):
    @abstractmethod
    def create(self, computation: CompatibilityComputation) -> CompatibilityRecord:
        """Assign identity and timestamp, then persist."""

    @abstractmethod
    def list(self) -> list[CompatibilityRecord]:
        """All records, newest first."""

    @abstractmethod
    def get(self, record_id: int) -> CompatibilityRecord | None:
        ...

    @abstractmethod
    def clear(self) -> int:
        """Delete every record and return how many were removed."""


class MemoryCompatibilityStore(CompatibilityStore):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[int, CompatibilityRecord] = {}
        self._next_id = 1

    def create(self, computation: CompatibilityComputation) -> CompatibilityRecord:
        with self._lock:
            record = CompatibilityRecord.from_computation(self._next_id, models.utcnow(), computation)
            self._records[record.id] = record
            self._next_id += 1
        logger.info("Stored compatibility result | backend=memory | id=%s", record.id)
        return record

    def list(self) -> list[CompatibilityRecord]:
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=_newest_first, reverse=True)

    def get(self, record_id: int) -> CompatibilityRecord | None:
        with self._lock:
            return self._records.get(record_id)

    def clear(self) -> int:
        with self._lock:
            removed = len(self._records)
            self._records.clear()
        logger.info("Cleared compatibility results | backend=memory | removed=%s", removed)
        return removed


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on DateTime(timezone=True) columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _row_to_record(row: models.CompatibilityResult) -> CompatibilityRecord:
    return CompatibilityRecord(
        id=row.id,
        created_at=_as_utc(row.created_at),
        partner1_name=row.partner1_name,
        partner2_name=row.partner2_name,
        partner1_date_of_birth=row.partner1_date_of_birth,
        partner1_birth_time=row.partner1_birth_time,
        partner2_date_of_birth=row.partner2_date_of_birth,
        partner2_birth_time=row.partner2_birth_time,
        partner1_abjad_value=row.partner1_abjad_value,
        partner2_abjad_value=row.partner2_abjad_value,
        partner1_digital_root=row.partner1_digital_root,
        partner2_digital_root=row.partner2_digital_root,
        partner1_element=row.partner1_element,
        partner2_element=row.partner2_element,
        name_compatibility_score=row.name_compatibility_score,
        life_path_compatibility_score=row.life_path_compatibility_score,
        overall_compatibility_score=row.overall_compatibility_score,
        compatibility_level=row.compatibility_level,
        insights=row.insights,
        marriage_advice=row.marriage_advice,
    )


class SqlCompatibilityStore(CompatibilityStore):
    """SQLAlchemy-backed store; one session per operation."""

    def __init__(self, session_factory: sessionmaker = SessionLocal) -> None:
        self._session_factory = session_factory

    def create(self, computation: CompatibilityComputation) -> CompatibilityRecord:
        try:
            with session_scope(self._session_factory) as db:
                row = models.CompatibilityResult(**computation.to_dict(), created_at=models.utcnow())
                db.add(row)
                db.flush()
                record = _row_to_record(row)
        except SQLAlchemyError as exc:
            raise StorageError("store") from exc
        logger.info("Stored compatibility result | backend=sql | id=%s", record.id)
        return record

    def list(self) -> list[CompatibilityRecord]:
        stmt = select(models.CompatibilityResult).order_by(
            models.CompatibilityResult.created_at.desc(),
            models.CompatibilityResult.id.desc(),
        )
        try:
            with session_scope(self._session_factory) as db:
                return [_row_to_record(row) for row in db.scalars(stmt)]
        except SQLAlchemyError as exc:
            raise StorageError("fetch") from exc

    def get(self, record_id: int) -> CompatibilityRecord | None:
        try:
            with session_scope(self._session_factory) as db:
                row = db.get(models.CompatibilityResult, record_id)
                return _row_to_record(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise StorageError("fetch") from exc

    def clear(self) -> int:
        try:
            with session_scope(self._session_factory) as db:
                result = db.execute(delete(models.CompatibilityResult))
                removed = result.rowcount or 0
        except SQLAlchemyError as exc:
            raise StorageError("clear") from exc
        logger.info("Cleared compatibility results | backend=sql | removed=%s", removed)
        return removed


def build_store(config: Settings) -> CompatibilityStore:
    if config.storage_backend == "sql":
        create_tables()
        logger.info("Using SQL result store | url=%s", config.database_url.split("@")[-1])
        return SqlCompatibilityStore()
    logger.info("Using in-memory result store")
    return MemoryCompatibilityStore()
