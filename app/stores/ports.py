# app/stores/ports.py

from datetime import datetime
from typing import List, Optional, Protocol

from app.models.daily_report_model import DailyReport
from app.models.entry_model import Entry
from app.schemas.entry_schema import EntryFilter
from app.schemas.report_schema import DailyReportFilter


class EntryStore(Protocol):
    # limite rígido de escritas por transação aceito por batch_put
    max_batch_writes: int

    def query(self, location_id: str, child_id: str, start: datetime, end: datetime) -> List[Entry]:
        """Registros da criança com occurred_at em [start, end)."""
        ...

    def batch_put(self, entries: List[Entry]) -> None:
        """Grava todos os registros em uma única transação (tudo ou nada)."""
        ...

    def list_entries(self, filters: EntryFilter) -> List[Entry]:
        ...


class ReportStore(Protocol):
    def get(self, report_id: str) -> Optional[DailyReport]:
        ...

    def upsert_merge(self, report: DailyReport) -> DailyReport:
        """Grava mesclando: só os campos definidos em `report` são sobrescritos."""
        ...

    def list_reports(self, filters: DailyReportFilter) -> List[DailyReport]:
        ...


class ChildDirectory(Protocol):
    def resolve_name(self, child_id: str) -> Optional[str]:
        ...

    def ids_in_class(self, class_id: str) -> List[str]:
        ...

    def class_name(self, class_id: str) -> Optional[str]:
        ...
