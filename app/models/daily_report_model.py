from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from config.database import Base

class DailyReport(Base):
    __tablename__ = "daily_reports"

    # chave natural "{child_id}-{date}"
    id = Column(String, primary_key=True)
    daycare_id = Column(String, nullable=False)
    location_id = Column(String, nullable=False, index=True)
    class_id = Column(String, nullable=True)
    class_name = Column(String, nullable=True)
    child_id = Column(String, nullable=False, index=True)
    child_name = Column(String, nullable=True)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD (UTC)

    total_activities = Column(Integer, nullable=False, default=0)
    activity_summary = Column(Text, nullable=False, default="")
    entries = Column(JSON, nullable=False, default=list)

    visible_to_parents = Column(Boolean, nullable=False, default=False)
    sent = Column(Boolean, nullable=False, default=False)
    sent_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
