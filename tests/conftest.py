from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.database import Base, get_db
from app.models.child_model import Child, Classroom
from app.schemas.auth_schema import AuthContext
from app.schemas.entry_schema import EntryCreateInput
from app.stores.sql_stores import SqlChildDirectory, SqlEntryStore, SqlReportStore
from app.utils.dt_utils import utc_now
from app.utils.entry_builder import build_entry
from config.settings import JWT_ALGORITHM, JWT_SECRET
from main import app


class FakeDirectory:
    def __init__(self, classes=None, names=None):
        self.classes = classes or {}
        self.names = names or {}
        self.class_queries = []

    def resolve_name(self, child_id):
        return self.names.get(child_id)

    def ids_in_class(self, class_id):
        self.class_queries.append(class_id)
        return list(self.classes.get(class_id, []))

    def class_name(self, class_id):
        return None


class FakeEntryStore:
    """Guarda os lotes gravados; `fail_on` lista as chamadas que devem falhar."""

    def __init__(self, max_batch_writes=500, fail_on=()):
        self.max_batch_writes = max_batch_writes
        self.fail_on = set(fail_on)
        self.calls = 0
        self.batches = []

    def batch_put(self, entries):
        call = self.calls
        self.calls += 1
        if call in self.fail_on:
            raise RuntimeError("store unavailable")
        self.batches.append(list(entries))

    @property
    def stored(self):
        return [entry for batch in self.batches for entry in batch]


def make_item(**fields) -> EntryCreateInput:
    fields.setdefault("occurredAt", "2025-01-02T10:00:00Z")
    fields.setdefault("childIds", ["c1"])
    return EntryCreateInput.model_validate(fields)


AUTH = AuthContext(userDocId="u1", daycareId="d1", locationId="l1", role="teacher")


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def seeded_db(db):
    db.add(Classroom(id="k1", daycare_id="d1", location_id="l1", name="Ladybugs"))
    db.add_all([
        Child(id="c1", daycare_id="d1", location_id="l1", class_id="k1", name="Ana"),
        Child(id="c2", daycare_id="d1", location_id="l1", class_id="k1", name="Bruno"),
        Child(id="c3", daycare_id="d1", location_id="l1", class_id="k1", name="Clara"),
        Child(id="c9", daycare_id="d1", location_id="l1", class_id=None, name="Davi"),
    ])
    db.commit()
    return db


@pytest.fixture
def entry_store(db):
    return SqlEntryStore(db)


@pytest.fixture
def report_store(db):
    return SqlReportStore(db)


@pytest.fixture
def directory(db):
    return SqlChildDirectory(db)


@pytest.fixture
def add_entry(entry_store):
    def _add(child_id="c1", occurred_at="2025-01-02T10:00:00Z", auth=AUTH, **fields):
        fields.setdefault("type", "Note")
        fields.setdefault("detail", "brincou no parque")
        item = make_item(occurredAt=occurred_at, childIds=[child_id], **fields)
        entry = build_entry(auth, item, child_id)
        entry_store.batch_put([entry])
        return entry
    return _add


@pytest.fixture
def client(seeded_db):
    def override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def jwt_for_user(user_doc_id, role="teacher", daycare_id=None, location_id=None):
    payload = {
        "sub": user_doc_id,
        "userDocId": user_doc_id,
        "role": role,
        "daycareId": daycare_id,
        "locationId": location_id,
        "exp": utc_now() + timedelta(days=3),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def auth_headers(role="teacher", user_doc_id="u1", daycare_id="d1", location_id="l1"):
    token = jwt_for_user(user_doc_id, role=role, daycare_id=daycare_id, location_id=location_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def teacher_headers():
    return auth_headers()


@pytest.fixture
def parent_headers():
    return auth_headers(role="parent", user_doc_id="p1")
