from app.models.daily_report_model import DailyReport


def _post(client, headers, *items):
    return client.post("/api/entries/bulk", json={"items": list(items)}, headers=headers)


def _item(child_id, occurred_at, **fields):
    fields.setdefault("type", "Note")
    fields.setdefault("detail", "ok")
    return {"childIds": [child_id], "occurredAt": occurred_at, **fields}


def test_teacher_reports_ordered_by_date_desc(client, teacher_headers):
    _post(
        client, teacher_headers,
        _item("c1", "2025-01-01T10:00:00Z"),
        _item("c1", "2025-01-03T10:00:00Z"),
        _item("c2", "2025-01-02T10:00:00Z"),
    )

    res = client.get("/api/reports/teacher", headers=teacher_headers)

    assert res.status_code == 200
    assert [r["date"] for r in res.json()] == ["2025-01-03", "2025-01-02", "2025-01-01"]
    report = res.json()[0]
    assert report["id"] == "c1-2025-01-03"
    assert report["activitySummary"] == "1 Note"
    assert report["entries"][0]["data"] == {"text": "ok"}


def test_teacher_report_filters(client, teacher_headers):
    _post(
        client, teacher_headers,
        _item("c1", "2025-01-01T10:00:00Z"),
        _item("c1", "2025-01-02T10:00:00Z", type="Attendance", subtype="Check out"),
        _item("c2", "2025-01-02T10:00:00Z"),
    )

    res = client.get(
        "/api/reports/teacher",
        params={"childId": "c1", "dateFrom": "2025-01-02", "dateTo": "2025-01-02"},
        headers=teacher_headers,
    )
    assert [r["id"] for r in res.json()] == ["c1-2025-01-02"]

    res = client.get("/api/reports/teacher", params={"sent": "false"}, headers=teacher_headers)
    assert sorted(r["id"] for r in res.json()) == ["c1-2025-01-01", "c2-2025-01-02"]


def test_parent_only_sees_visible_reports(client, teacher_headers, parent_headers):
    _post(
        client, teacher_headers,
        _item("c1", "2025-01-02T18:00:00Z", type="Attendance", subtype="Check out"),
        _item("c2", "2025-01-02T10:00:00Z"),
    )

    res = client.get("/api/reports/parent", params={"childIds": "c1, c2"}, headers=parent_headers)

    assert res.status_code == 200
    assert [r["id"] for r in res.json()] == ["c1-2025-01-02"]
    assert res.json()[0]["sent"] is True
    assert res.json()[0]["sentAt"].endswith("Z")


def test_parent_listing_requires_child_ids(client, parent_headers):
    res = client.get("/api/reports/parent", params={"childIds": " , "}, headers=parent_headers)
    assert res.status_code == 400


def test_send_report_makes_it_visible(client, seeded_db, teacher_headers, parent_headers):
    _post(client, teacher_headers, _item("c2", "2025-01-02T10:00:00Z"))

    res = client.post("/api/reports/c2-2025-01-02/send", headers=teacher_headers)
    assert res.status_code == 204

    report = seeded_db.get(DailyReport, "c2-2025-01-02")
    assert report.sent is True
    assert report.visible_to_parents is True
    assert report.sent_at is not None

    res = client.get("/api/reports/parent", params={"childIds": "c2"}, headers=parent_headers)
    assert [r["id"] for r in res.json()] == ["c2-2025-01-02"]


def test_send_unknown_report(client, seeded_db, teacher_headers):
    res = client.post("/api/reports/nope-2025-01-02/send", headers=teacher_headers)
    assert res.status_code == 404
    assert seeded_db.query(DailyReport).count() == 0


def test_generate_report(client, seeded_db, teacher_headers):
    _post(client, teacher_headers, _item("c1", "2025-01-02T10:00:00Z"))
    seeded_db.query(DailyReport).delete()
    seeded_db.commit()

    res = client.post(
        "/api/reports/generate", params={"childId": "c1", "date": "2025-01-02"}, headers=teacher_headers,
    )

    assert res.status_code == 200
    assert res.json()["totalActivities"] == 1
    assert res.json()["childName"] == "Ana"
    assert res.json()["visibleToParents"] is False


def test_generate_without_entries(client, teacher_headers):
    res = client.post(
        "/api/reports/generate", params={"childId": "c1", "date": "2025-01-02"}, headers=teacher_headers,
    )
    assert res.status_code == 404


def test_generate_with_bad_date(client, teacher_headers):
    res = client.post(
        "/api/reports/generate", params={"childId": "c1", "date": "02/01/2025"}, headers=teacher_headers,
    )
    assert res.status_code == 400


def test_parent_listing_narrows_by_class_and_child(client, seeded_db, teacher_headers, parent_headers):
    checkout = {"type": "Attendance", "subtype": "Check out"}
    _post(
        client, teacher_headers,
        _item("c1", "2025-01-02T18:00:00Z", classId="k1", **checkout),
        _item("c9", "2025-01-02T18:00:00Z", **checkout),
    )

    res = client.get(
        "/api/reports/parent", params={"childIds": "c1,c9", "classId": "k1"}, headers=parent_headers,
    )
    assert [r["id"] for r in res.json()] == ["c1-2025-01-02"]

    res = client.get(
        "/api/reports/parent", params={"childIds": "c1,c9", "childId": "c9"}, headers=parent_headers,
    )
    assert [r["id"] for r in res.json()] == ["c9-2025-01-02"]

    res = client.get(
        "/api/reports/parent", params={"childIds": "c1,c9", "childId": "c2"}, headers=parent_headers,
    )
    assert res.status_code == 200
    assert res.json() == []
