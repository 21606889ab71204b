"""Whole-document persistence for series."""

from typing import List

from fastapi import Depends
from sqlmodel import Session, select

from lifestory.core.database import get_session
from lifestory.core.errors import NotFoundError
from lifestory.models.library import Season, Series
from lifestory.models.records import SeriesRecord, utcnow


def _to_document(record: SeriesRecord) -> Series:
    return Series(
        id=record.id,
        title=record.title,
        description=record.description,
        thumbnail=record.thumbnail,
        seasons=[Season.model_validate(s) for s in record.seasons or []],
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _write_record(record: SeriesRecord, series: Series) -> None:
    record.title = series.title
    record.description = series.description
    record.thumbnail = series.thumbnail
    # A fresh list so the JSON column is flagged dirty.
    record.seasons = [s.to_json() for s in series.seasons]
    record.updated_at = utcnow()


class SeriesRepository:
    """Loads and saves series documents as single units."""

    def __init__(self, session: Session):
        self.session = session

    def list(self) -> List[Series]:
        """All series, newest first."""
        statement = select(SeriesRecord).order_by(SeriesRecord.created_at.desc())
        return [_to_document(r) for r in self.session.exec(statement).all()]

    def get(self, series_id: str) -> Series | None:
        record = self.session.get(SeriesRecord, series_id)
        return _to_document(record) if record else None

    def load(self, series_id: str) -> Series:
        series = self.get(series_id)
        if series is None:
            raise NotFoundError("Series not found")
        return series

    def create(self, series: Series) -> Series:
        record = SeriesRecord(id=series.id)
        _write_record(record, series)
        record.created_at = record.updated_at
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return _to_document(record)

    def save(self, series: Series) -> Series:
        record = self.session.get(SeriesRecord, series.id)
        if record is None:
            raise NotFoundError("Series not found")
        _write_record(record, series)
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return _to_document(record)

    def delete(self, series_id: str) -> None:
        record = self.session.get(SeriesRecord, series_id)
        if record is None:
            raise NotFoundError("Series not found")
        self.session.delete(record)
        self.session.commit()


def get_series_repository(session: Session = Depends(get_session)) -> SeriesRepository:
    """Dependency that provides a repository bound to the request session."""
    return SeriesRepository(session)
