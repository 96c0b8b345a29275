# app/utils/entry_builder.py

import uuid
from datetime import datetime
from typing import Optional

from app.models.entry_model import Entry
from app.schemas.auth_schema import AuthContext
from app.schemas.entry_data import (
    AttendanceData,
    EmptyData,
    EntryData,
    SleepData,
    TextData,
    ToiletData,
    to_storage,
)
from app.schemas.entry_schema import EntryCreateInput
from app.utils.dt_utils import parse_occurred_at, to_iso, utc_now
from app.utils.entry_validator import ATTENDANCE_STATUS, TEXT_TYPES

# Registros criados por este fluxo são sempre de professores
CREATED_BY_ROLE = "teacher"
SUBTYPE_TYPES = ("Attendance", "Food", "Sleep")


class MissingAuthScopeError(Exception):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def check_auth_context(auth: AuthContext) -> None:
    """Falha antes de expandir ou gravar qualquer coisa se faltar escopo."""
    if not auth.user_doc_id:
        raise MissingAuthScopeError("missing_userDocId")
    if not auth.daycare_id:
        raise MissingAuthScopeError("missing_daycareId")
    if not auth.location_id:
        raise MissingAuthScopeError("missing_locationId")


def build_entry_data(item: EntryCreateInput, occurred_iso: str) -> EntryData:
    if item.type == "Attendance":
        return AttendanceData(status=ATTENDANCE_STATUS[item.subtype])
    if item.type == "Sleep":
        # "Started" abre a soneca; qualquer outro subtipo fecha
        if item.subtype == "Started":
            return SleepData(start=occurred_iso)
        return SleepData(end=occurred_iso)
    if item.type == "Toilet":
        return ToiletData(toilet_time=occurred_iso, toilet_kind=item.toilet_kind)
    if item.type in TEXT_TYPES:
        return TextData(text=item.detail.strip())
    return EmptyData()


def build_entry(
    auth: AuthContext,
    item: EntryCreateInput,
    child_id: str,
    now: Optional[datetime] = None,
) -> Entry:
    """Monta o Entry de uma criança a partir de um item já validado."""
    now = now or utc_now()
    occurred_at = parse_occurred_at(item.occurred_at)
    data = build_entry_data(item, to_iso(occurred_at))

    return Entry(
        id=str(uuid.uuid4()),
        daycare_id=auth.daycare_id,
        location_id=auth.location_id,
        class_id=item.class_id,
        child_id=child_id,
        created_by_user_id=auth.user_doc_id,
        created_by_role=CREATED_BY_ROLE,
        created_at=now,
        occurred_at=occurred_at,
        type=item.type,
        subtype=item.subtype if item.type in SUBTYPE_TYPES else None,
        data=to_storage(data),
        detail=item.detail,
        photo_url=item.photo_url,
        visible_to_parents=True,
        published_at=now,
    )
