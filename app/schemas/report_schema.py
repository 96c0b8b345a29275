# app/schemas/report_schema.py

from pydantic import BaseModel, Field, field_serializer
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.utils.dt_utils import to_iso


class DailyReportOut(BaseModel):
    id: str
    daycare_id: str = Field(alias="daycareId")
    location_id: str = Field(alias="locationId")
    class_id: Optional[str] = Field(None, alias="classId")
    class_name: Optional[str] = Field(None, alias="className")
    child_id: str = Field(alias="childId")
    child_name: Optional[str] = Field(None, alias="childName")
    date: str
    total_activities: int = Field(alias="totalActivities")
    activity_summary: str = Field(alias="activitySummary")
    entries: List[Dict[str, Any]] = Field(default_factory=list)
    visible_to_parents: bool = Field(alias="visibleToParents")
    sent: bool
    sent_at: Optional[datetime] = Field(None, alias="sentAt")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True

    @field_serializer("sent_at", "created_at", "updated_at")
    def _serialize_dt(self, value: Optional[datetime]) -> Optional[str]:
        return to_iso(value)


class DailyReportFilter(BaseModel):
    location_id: Optional[str] = None
    class_id: Optional[str] = None
    child_ids: Optional[List[str]] = None
    date_from: Optional[str] = None   # YYYY-MM-DD, inclusivo
    date_to: Optional[str] = None     # YYYY-MM-DD, inclusivo
    sent: Optional[bool] = None
    only_visible_to_parents: bool = False
