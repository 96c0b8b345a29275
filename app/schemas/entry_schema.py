# app/schemas/entry_schema.py

from pydantic import BaseModel, Field, ValidationError, field_serializer, field_validator
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.utils.dt_utils import to_iso


class EntryCreateInput(BaseModel):
    # Entrada não confiável: a validação por tipo fica em entry_validator,
    # assim um item inválido não derruba o lote inteiro. Valores com tipo
    # errado viram vazios e caem nos códigos de motivo de validate_item.
    type: Optional[str] = None
    subtype: Optional[str] = None
    toilet_kind: Optional[str] = Field(None, alias="toiletKind")
    detail: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoUrl")
    occurred_at: Optional[str] = Field(None, alias="occurredAt")
    child_ids: List[str] = Field(default_factory=list, alias="childIds")
    class_id: Optional[str] = Field(None, alias="classId")
    apply_to_all_in_class: bool = Field(False, alias="applyToAllInClass")

    class Config:
        populate_by_name = True

    @field_validator(
        "type", "subtype", "toilet_kind", "detail", "photo_url", "occurred_at", "class_id",
        mode="before",
    )
    @classmethod
    def _only_strings(cls, value):
        return value if isinstance(value, str) else None

    @field_validator("child_ids", mode="before")
    @classmethod
    def _only_string_ids(cls, value):
        if not isinstance(value, list):
            return []
        return [child_id for child_id in value if isinstance(child_id, str)]

    @field_validator("apply_to_all_in_class", mode="before")
    @classmethod
    def _truthy(cls, value):
        return bool(value)


def parse_item(raw) -> Optional[EntryCreateInput]:
    """Converte um item bruto do lote; None quando não é um objeto."""
    if isinstance(raw, EntryCreateInput):
        return raw
    if not isinstance(raw, dict):
        return None
    try:
        return EntryCreateInput.model_validate(raw)
    except ValidationError:
        return None


class BulkEntryCreateRequest(BaseModel):
    # itens brutos: cada um é convertido separadamente em bulk_create_entries
    items: List[Any]


class CreatedEntry(BaseModel):
    id: str
    type: str


class FailedItem(BaseModel):
    index: int
    reason: str


class BulkEntryCreateResult(BaseModel):
    created: List[CreatedEntry] = Field(default_factory=list)
    failed: List[FailedItem] = Field(default_factory=list)


class EntryRead(BaseModel):
    id: str
    daycare_id: str = Field(alias="daycareId")
    location_id: str = Field(alias="locationId")
    class_id: Optional[str] = Field(None, alias="classId")
    child_id: str = Field(alias="childId")
    created_by_user_id: str = Field(alias="createdByUserId")
    created_by_role: str = Field(alias="createdByRole")
    created_at: datetime = Field(alias="createdAt")
    occurred_at: datetime = Field(alias="occurredAt")
    type: str
    subtype: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    detail: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoUrl")
    visible_to_parents: bool = Field(alias="visibleToParents")
    published_at: datetime = Field(alias="publishedAt")

    class Config:
        from_attributes = True
        populate_by_name = True

    @field_serializer("created_at", "occurred_at", "published_at")
    def _serialize_dt(self, value: datetime) -> str:
        return to_iso(value)


def entry_snapshot(entry) -> Dict[str, Any]:
    """Representação JSON de um Entry, usada no snapshot do relatório diário."""
    return EntryRead.model_validate(entry).model_dump(mode="json", by_alias=True)


class EntryFilter(BaseModel):
    location_id: Optional[str] = None
    child_id: Optional[str] = None
    class_id: Optional[str] = None
    type: Optional[str] = None
    date_from: Optional[datetime] = None  # occurred_at >= date_from
    date_to: Optional[datetime] = None    # occurred_at < date_to
    only_visible_to_parents: bool = False
    limit: int = 50
