# app/models/entry_model.py
from sqlalchemy import Column, String, DateTime, Boolean, Text, JSON, Index

from config.database import Base

class Entry(Base):
    __tablename__ = "entries"

    # id é gerado antes da gravação (uuid) e repetido dentro do documento
    id = Column(String(36), primary_key=True, index=True)
    daycare_id = Column(String, nullable=False)
    location_id = Column(String, nullable=False, index=True)
    class_id = Column(String, nullable=True)
    child_id = Column(String, nullable=False, index=True)

    created_by_user_id = Column(String, nullable=False)
    created_by_role = Column(String(20), nullable=False, default="teacher")
    created_at = Column(DateTime, nullable=False)

    occurred_at = Column(DateTime, nullable=False)
    type = Column(String(50), nullable=False)
    subtype = Column(String(50), nullable=True)
    data = Column(JSON, nullable=False, default=dict)
    detail = Column(Text, nullable=True)
    photo_url = Column(String, nullable=True)

    visible_to_parents = Column(Boolean, nullable=False, default=True)
    published_at = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("ix_entries_location_child_occurred", "location_id", "child_id", "occurred_at"),
    )
