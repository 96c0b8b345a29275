# app/stores/sql_stores.py

from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.child_model import Child, Classroom
from app.models.daily_report_model import DailyReport
from app.models.entry_model import Entry
from app.schemas.entry_schema import EntryFilter
from app.schemas.report_schema import DailyReportFilter
from config.settings import ENTRY_BATCH_WRITE_LIMIT


class SqlEntryStore:
    def __init__(self, db: Session, max_batch_writes: int = ENTRY_BATCH_WRITE_LIMIT):
        self.db = db
        self.max_batch_writes = max_batch_writes

    def query(self, location_id: str, child_id: str, start: datetime, end: datetime) -> List[Entry]:
        return (
            self.db.query(Entry)
            .filter(
                Entry.location_id == location_id,
                Entry.child_id == child_id,
                Entry.occurred_at >= start,
                Entry.occurred_at < end,
            )
            .order_by(Entry.occurred_at.asc())
            .all()
        )

    def batch_put(self, entries: List[Entry]) -> None:
        if len(entries) > self.max_batch_writes:
            raise ValueError(
                f"batch de {len(entries)} escritas excede o limite de {self.max_batch_writes}"
            )

        try:
            # merge pelo id pré-gerado: repetir o mesmo lote não duplica registros
            for entry in entries:
                self.db.merge(entry)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def list_entries(self, filters: EntryFilter) -> List[Entry]:
        q = self.db.query(Entry)

        if filters.only_visible_to_parents:
            q = q.filter(Entry.visible_to_parents.is_(True))
        if filters.location_id:
            q = q.filter(Entry.location_id == filters.location_id)
        if filters.child_id:
            q = q.filter(Entry.child_id == filters.child_id)
        if filters.class_id:
            q = q.filter(Entry.class_id == filters.class_id)
        if filters.type:
            q = q.filter(Entry.type == filters.type)
        if filters.date_from:
            q = q.filter(Entry.occurred_at >= filters.date_from)
        if filters.date_to:
            q = q.filter(Entry.occurred_at < filters.date_to)

        return q.order_by(Entry.occurred_at.desc()).limit(filters.limit).all()


class SqlReportStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, report_id: str) -> Optional[DailyReport]:
        return self.db.get(DailyReport, report_id)

    def upsert_merge(self, report: DailyReport) -> DailyReport:
        try:
            merged = self.db.merge(report)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(merged)
        return merged

    def list_reports(self, filters: DailyReportFilter) -> List[DailyReport]:
        q = self.db.query(DailyReport)

        if filters.child_ids is not None:
            q = q.filter(DailyReport.child_id.in_(filters.child_ids))
        if filters.location_id:
            q = q.filter(DailyReport.location_id == filters.location_id)
        if filters.class_id:
            q = q.filter(DailyReport.class_id == filters.class_id)
        if filters.sent is not None:
            q = q.filter(DailyReport.sent.is_(filters.sent))
        if filters.only_visible_to_parents:
            q = q.filter(DailyReport.visible_to_parents.is_(True))
        if filters.date_from:
            q = q.filter(DailyReport.date >= filters.date_from)
        if filters.date_to:
            q = q.filter(DailyReport.date <= filters.date_to)

        return q.order_by(DailyReport.date.desc()).all()


class SqlChildDirectory:
    def __init__(self, db: Session):
        self.db = db

    def resolve_name(self, child_id: str) -> Optional[str]:
        child = self.db.get(Child, child_id)
        return child.name if child else None

    def ids_in_class(self, class_id: str) -> List[str]:
        rows = self.db.query(Child.id).filter(Child.class_id == class_id).all()
        return [row.id for row in rows]

    def class_name(self, class_id: str) -> Optional[str]:
        classroom = self.db.get(Classroom, class_id)
        return classroom.name if classroom else None
