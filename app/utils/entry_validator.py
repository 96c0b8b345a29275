# app/utils/entry_validator.py

from typing import Optional

from app.schemas.entry_schema import EntryCreateInput
from app.utils.dt_utils import parse_occurred_at

ATTENDANCE_STATUS = {
    "Check in": "check_in",
    "Check out": "check_out",
}
TOILET_KINDS = ("urine", "bm")
TEXT_TYPES = ("Activity", "Note", "Health")


def _blank(value) -> bool:
    return not str(value or "").strip()


def validate_item(item: EntryCreateInput) -> Optional[str]:
    """
    Valida um item do lote conforme o tipo.
    Retorna o código do motivo quando inválido, ou None quando ok.
    Não lança exceção: itens inválidos não interrompem os demais.
    """
    if parse_occurred_at(item.occurred_at) is None:
        return "invalid_occurredAt"

    if item.type == "Attendance":
        if item.subtype not in ATTENDANCE_STATUS:
            return "attendance_subtype_required"
    elif item.type == "Food":
        if _blank(item.subtype):
            return "food_subtype_required"
    elif item.type == "Sleep":
        if _blank(item.subtype):
            return "sleep_subtype_required"
    elif item.type == "Toilet":
        if item.toilet_kind not in TOILET_KINDS:
            return "toilet_kind_required"
    elif item.type in TEXT_TYPES:
        if _blank(item.detail):
            return "detail_required"
    elif item.type == "Photo":
        if _blank(item.photo_url):
            return "photo_url_required"
    else:
        return "unsupported_type"

    if item.apply_to_all_in_class and not item.class_id:
        return "classId_required_when_applyToAllInClass"

    return None
