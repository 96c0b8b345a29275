# app/utils/report_generator.py

import logging
from collections import Counter
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from app.models.daily_report_model import DailyReport
from app.models.entry_model import Entry
from app.schemas.entry_schema import entry_snapshot
from app.stores.ports import ChildDirectory, EntryStore, ReportStore
from app.utils.dt_utils import day_bucket, day_range, utc_now

logger = logging.getLogger(__name__)

SUMMARY_TOP_TYPES = 3


def report_key(child_id: str, day: str) -> str:
    return f"{child_id}-{day}"


def build_activity_summary(entries: Iterable[Entry]) -> Tuple[int, str]:
    """
    Conta os registros por tipo e monta algo como "3 Food, 2 Sleep, 1 Activity".
    Só os 3 tipos mais frequentes entram; empates seguem a ordem alfabética do tipo.
    """
    counts = Counter(entry.type or "Unknown" for entry in entries)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    parts = [f"{count} {entry_type}" for entry_type, count in ranked[:SUMMARY_TOP_TYPES]]
    return sum(counts.values()), ", ".join(parts)


def is_checkout(entry: Entry) -> bool:
    return entry.type == "Attendance" and entry.subtype == "Check out"


class DailyAggregator:
    def __init__(
        self,
        entry_store: EntryStore,
        report_store: ReportStore,
        directory: ChildDirectory,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.entry_store = entry_store
        self.report_store = report_store
        self.directory = directory
        self.clock = clock

    def upsert(
        self,
        location_id: str,
        child_id: str,
        day: date,
        daycare_id: Optional[str] = None,
        class_id: Optional[str] = None,
        class_name: Optional[str] = None,
        child_name: Optional[str] = None,
        make_visible_to_parents: bool = False,
    ) -> Optional[DailyReport]:
        """
        Recalcula o relatório do dia (UTC) a partir de todos os registros da criança.
        Sem registros no dia não grava nada e retorna None.
        """
        start, end = day_range(day)
        entries = self.entry_store.query(location_id, child_id, start, end)
        if not entries:
            return None

        total_activities, summary = build_activity_summary(entries)

        if child_name is None:
            child_name = self.directory.resolve_name(child_id)
        class_id = class_id or entries[0].class_id
        if class_name is None and class_id:
            class_name = self.directory.class_name(class_id)

        now = self.clock()
        key = report_key(child_id, day.isoformat())
        existing = self.report_store.get(key)

        # visibilidade só avança: uma vez enviado, continua enviado
        visible = make_visible_to_parents or bool(existing and existing.visible_to_parents)
        sent = make_visible_to_parents or bool(existing and existing.sent)
        if existing is not None and existing.sent_at is not None:
            sent_at = existing.sent_at
        else:
            sent_at = now if sent else None

        report = DailyReport(
            id=key,
            daycare_id=daycare_id or entries[0].daycare_id,
            location_id=location_id,
            class_id=class_id,
            class_name=class_name,
            child_id=child_id,
            child_name=child_name,
            date=day.isoformat(),
            total_activities=total_activities,
            activity_summary=summary,
            entries=[entry_snapshot(entry) for entry in entries],
            visible_to_parents=visible,
            sent=sent,
            sent_at=sent_at,
            created_at=existing.created_at if existing is not None else now,
            updated_at=now,
        )

        saved = self.report_store.upsert_merge(report)
        logger.info(
            "relatório %s atualizado: %s atividades, visível=%s",
            key, total_activities, visible,
        )
        return saved

    def upsert_for_entries(self, entries: Iterable[Entry]) -> List[DailyReport]:
        """
        Agrupa registros recém-criados por (criança, dia UTC) e recalcula
        cada relatório uma única vez.
        """
        groups: Dict[Tuple[str, str], List[Entry]] = {}
        for entry in entries:
            if not entry.child_id or not entry.occurred_at or not entry.location_id:
                continue
            groups.setdefault((entry.child_id, day_bucket(entry.occurred_at)), []).append(entry)

        reports = []
        for (child_id, day), group in groups.items():
            first = group[0]
            report = self.upsert(
                location_id=first.location_id,
                child_id=child_id,
                day=date.fromisoformat(day),
                daycare_id=first.daycare_id,
                class_id=first.class_id,
                make_visible_to_parents=any(is_checkout(entry) for entry in group),
            )
            if report is not None:
                reports.append(report)

        return reports


def mark_report_sent(
    report_store: ReportStore,
    report_id: str,
    clock: Callable[[], datetime] = utc_now,
) -> Optional[DailyReport]:
    """Marca o relatório como enviado/visível sem recalcular. None se não existir."""
    if report_store.get(report_id) is None:
        return None

    now = clock()
    report = report_store.upsert_merge(
        DailyReport(
            id=report_id,
            sent=True,
            visible_to_parents=True,
            sent_at=now,
            updated_at=now,
        )
    )
    logger.info("relatório %s marcado como enviado", report_id)
    return report
