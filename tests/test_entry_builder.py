from datetime import datetime

import pytest

from app.schemas.auth_schema import AuthContext
from app.utils.entry_builder import MissingAuthScopeError, build_entry, check_auth_context
from conftest import AUTH, make_item


@pytest.mark.parametrize("fields,reason", [
    ({"daycareId": "d1", "locationId": "l1"}, "missing_userDocId"),
    ({"userDocId": "u1", "locationId": "l1"}, "missing_daycareId"),
    ({"userDocId": "u1", "daycareId": "d1"}, "missing_locationId"),
    ({"userDocId": "u1", "daycareId": "", "locationId": "l1"}, "missing_daycareId"),
])
def test_missing_auth_scope(fields, reason):
    with pytest.raises(MissingAuthScopeError) as exc:
        check_auth_context(AuthContext(**fields))
    assert exc.value.reason == reason


def test_complete_auth_scope_passes():
    check_auth_context(AUTH)


def test_common_fields():
    now = datetime(2025, 1, 2, 12, 0, 0)
    item = make_item(type="Note", detail="  dormiu bem  ", classId="k1")
    entry = build_entry(AUTH, item, "c7", now=now)

    assert entry.id
    assert entry.child_id == "c7"
    assert entry.daycare_id == "d1"
    assert entry.location_id == "l1"
    assert entry.class_id == "k1"
    assert entry.created_by_user_id == "u1"
    assert entry.created_by_role == "teacher"
    assert entry.visible_to_parents is True
    assert entry.created_at == now
    assert entry.published_at == now
    assert entry.detail == "  dormiu bem  "
    assert entry.data == {"text": "dormiu bem"}


def test_fan_out_entries_get_distinct_ids_and_same_payload():
    item = make_item(type="Food", subtype="Lunch", detail="arroz")
    first = build_entry(AUTH, item, "c1")
    second = build_entry(AUTH, item, "c2")

    assert first.id != second.id
    assert (first.occurred_at, first.type, first.subtype, first.detail) == (
        second.occurred_at, second.type, second.subtype, second.detail,
    )


def test_occurred_at_is_normalized_to_utc():
    item = make_item(type="Note", detail="ok", occurredAt="2025-01-02T20:00:00+02:00")
    assert build_entry(AUTH, item, "c1").occurred_at == datetime(2025, 1, 2, 18, 0, 0)


@pytest.mark.parametrize("subtype,status", [("Check in", "check_in"), ("Check out", "check_out")])
def test_attendance_status(subtype, status):
    entry = build_entry(AUTH, make_item(type="Attendance", subtype=subtype), "c1")
    assert entry.subtype == subtype
    assert entry.data == {"status": status}


def test_sleep_started_sets_start():
    item = make_item(type="Sleep", subtype="Started", occurredAt="2025-01-02T13:00:00Z")
    entry = build_entry(AUTH, item, "c1")
    assert entry.data == {"start": "2025-01-02T13:00:00Z"}


def test_sleep_woke_up_sets_end_without_duration():
    item = make_item(type="Sleep", subtype="Woke up", occurredAt="2025-01-02T14:30:00Z")
    entry = build_entry(AUTH, item, "c1")
    assert entry.data == {"end": "2025-01-02T14:30:00Z"}


def test_toilet_mapping():
    item = make_item(type="Toilet", toiletKind="urine", occurredAt="2025-01-02T09:15:00Z")
    entry = build_entry(AUTH, item, "c1")
    assert entry.data == {"toiletTime": "2025-01-02T09:15:00Z", "toiletKind": "urine"}
    assert entry.subtype is None


def test_photo_only_sets_top_level_url():
    item = make_item(type="Photo", photoUrl="https://cdn.example/p.jpg")
    entry = build_entry(AUTH, item, "c1")
    assert entry.photo_url == "https://cdn.example/p.jpg"
    assert entry.data == {}


def test_food_keeps_subtype_and_empty_data():
    entry = build_entry(AUTH, make_item(type="Food", subtype="Snack"), "c1")
    assert entry.subtype == "Snack"
    assert entry.data == {}
