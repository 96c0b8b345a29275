from fastapi import APIRouter, Depends, HTTPException, Query, Response
from typing import List, Optional

from app.dependencies.auth import get_auth_context
from app.dependencies.stores import get_aggregator, get_report_store
from app.schemas.auth_schema import AuthContext
from app.schemas.report_schema import DailyReportFilter, DailyReportOut
from app.stores.sql_stores import SqlReportStore
from app.utils.dt_utils import parse_day
from app.utils.report_generator import DailyAggregator, mark_report_sent

router = APIRouter(prefix="/reports", tags=["daily report"])


@router.get("/teacher", response_model=List[DailyReportOut])
def get_teacher_reports(
    class_id: Optional[str] = Query(None, alias="classId"),
    child_id: Optional[str] = Query(None, alias="childId"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    sent: Optional[bool] = Query(None),
    auth: AuthContext = Depends(get_auth_context),
    report_store: SqlReportStore = Depends(get_report_store),
):
    """
    Relatórios diários da unidade do professor, do mais recente para o mais antigo.
    Filtros opcionais: turma, criança, intervalo de datas (YYYY-MM-DD) e enviado.
    """
    if not auth.daycare_id or not auth.location_id:
        raise HTTPException(status_code=400, detail="Escopo de creche ou unidade ausente")

    filters = DailyReportFilter(
        location_id=auth.location_id,
        class_id=class_id,
        child_ids=[child_id] if child_id else None,
        date_from=date_from,
        date_to=date_to,
        sent=sent,
    )
    return report_store.list_reports(filters)


@router.get("/parent", response_model=List[DailyReportOut])
def get_parent_reports(
    child_ids: str = Query("", alias="childIds"),
    child_id: Optional[str] = Query(None, alias="childId"),
    class_id: Optional[str] = Query(None, alias="classId"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    sent: Optional[bool] = Query(None),
    auth: AuthContext = Depends(get_auth_context),
    report_store: SqlReportStore = Depends(get_report_store),
):
    """
    Relatórios liberados para os responsáveis, das crianças informadas
    em childIds (lista separada por vírgula). childId restringe a uma
    dessas crianças; fora da lista não retorna nada.
    """
    if not auth.daycare_id:
        raise HTTPException(status_code=400, detail="Escopo de creche ausente")

    ids = [item.strip() for item in child_ids.split(",") if item.strip()]
    if not ids:
        raise HTTPException(status_code=400, detail="Parâmetro childIds ausente")

    if child_id:
        if child_id not in ids:
            return []
        ids = [child_id]

    filters = DailyReportFilter(
        location_id=auth.location_id,
        class_id=class_id,
        child_ids=ids,
        date_from=date_from,
        date_to=date_to,
        sent=sent,
        only_visible_to_parents=True,
    )
    return report_store.list_reports(filters)


@router.post("/generate", response_model=DailyReportOut)
def generate_daily_report(
    child_id: str = Query(..., alias="childId"),
    date: str = Query(...),
    auth: AuthContext = Depends(get_auth_context),
    aggregator: DailyAggregator = Depends(get_aggregator),
):
    """
    Recalcula o relatório de uma criança em um dia (UTC) a partir dos registros.
    Não altera a visibilidade já concedida.
    """
    if not auth.location_id:
        raise HTTPException(status_code=401, detail="missing_location_scope")

    day = parse_day(date)
    if day is None:
        raise HTTPException(status_code=400, detail="Data inválida, use YYYY-MM-DD")

    report = aggregator.upsert(location_id=auth.location_id, child_id=child_id, day=day)
    if report is None:
        raise HTTPException(status_code=404, detail="Nenhum registro encontrado para o dia")
    return report


@router.post("/{report_id}/send", status_code=204)
def send_daily_report(
    report_id: str,
    auth: AuthContext = Depends(get_auth_context),
    report_store: SqlReportStore = Depends(get_report_store),
):
    """Libera o relatório para os responsáveis (enviado = visível = true)."""
    report = mark_report_sent(report_store, report_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Relatório não encontrado")
    return Response(status_code=204)
