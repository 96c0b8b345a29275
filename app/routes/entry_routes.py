from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from app.dependencies.auth import get_auth_context
from app.dependencies.stores import (
    get_aggregator,
    get_bulk_writer,
    get_child_directory,
    get_entry_store,
)
from app.schemas.auth_schema import AuthContext
from app.schemas.entry_schema import (
    BulkEntryCreateRequest,
    BulkEntryCreateResult,
    EntryFilter,
    EntryRead,
)
from app.services.entry_service import bulk_create_entries
from app.stores.sql_stores import SqlChildDirectory, SqlEntryStore
from app.utils.bulk_writer import BulkCommitError, BulkWriter
from app.utils.dt_utils import parse_occurred_at
from app.utils.entry_builder import MissingAuthScopeError, check_auth_context
from app.utils.report_generator import DailyAggregator

router = APIRouter(prefix="/entries", tags=["entries"])

# valores "Todos ..." da interface significam sem filtro
ALL_SENTINELS = ("all", "all classes", "all children")


def _normalize_optional(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    if not text or text.lower() in ALL_SENTINELS:
        return None
    return text


@router.post("/bulk", response_model=BulkEntryCreateResult)
def create_entries_bulk(
    payload: BulkEntryCreateRequest,
    auth: AuthContext = Depends(get_auth_context),
    directory: SqlChildDirectory = Depends(get_child_directory),
    writer: BulkWriter = Depends(get_bulk_writer),
    aggregator: DailyAggregator = Depends(get_aggregator),
):
    """
    Cria registros em lote para uma ou mais crianças (ou a turma toda).
    Retorna os registros criados e os índices dos itens que falharam.
    """
    try:
        # escopo ausente aborta antes de qualquer outra checagem
        check_auth_context(auth)
        if not payload.items:
            raise HTTPException(status_code=400, detail="empty_items")
        return bulk_create_entries(auth, payload.items, directory, writer, aggregator)
    except MissingAuthScopeError as e:
        raise HTTPException(status_code=401, detail=e.reason)
    except BulkCommitError:
        raise HTTPException(status_code=503, detail="commit_failed")


@router.get("", response_model=List[EntryRead])
def list_entries(
    child_id: Optional[str] = Query(None, alias="childId"),
    class_id: Optional[str] = Query(None, alias="classId"),
    entry_type: Optional[str] = Query(None, alias="type"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    limit: Optional[str] = Query(None),
    auth: AuthContext = Depends(get_auth_context),
    entry_store: SqlEntryStore = Depends(get_entry_store),
):
    """
    Lista registros ordenados por occurredAt decrescente.
    - parent: apenas registros visíveis e com childId obrigatório
    - teacher: restrito à própria unidade (locationId)
    """
    filters = EntryFilter(
        child_id=_normalize_optional(child_id),
        class_id=_normalize_optional(class_id),
        type=_normalize_optional(entry_type),
        date_from=parse_occurred_at(date_from),
        date_to=parse_occurred_at(date_to),
        limit=_clamp_limit(limit),
    )

    if auth.role == "parent":
        if not filters.child_id:
            raise HTTPException(status_code=400, detail="childId_required_for_parent")
        filters.only_visible_to_parents = True
    elif auth.role == "teacher":
        if not auth.location_id:
            raise HTTPException(status_code=401, detail="missing_location_scope")
        filters.location_id = auth.location_id
    else:
        raise HTTPException(status_code=403, detail="forbidden_role")

    return entry_store.list_entries(filters)


def _clamp_limit(value: Optional[str], default: int = 50, low: int = 1, high: int = 100) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return max(low, min(number, high))
