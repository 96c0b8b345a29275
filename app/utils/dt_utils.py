# app/utils/dt_utils.py

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

# Formatos aceitos (mesmo subconjunto ISO-8601 que o app envia):
#   YYYY-MM-DD
#   YYYY-MM-DDTHH:MM[:SS[.fração]][Z|±HH:MM|±HHMM]
# Espaço também vale como separador no lugar do "T".
_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DATETIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2})"
    r"(?::(\d{2})(?:\.(\d{1,9}))?)?"
    r"(Z|z|[+-]\d{2}:?\d{2})?$"
)


def utc_now() -> datetime:
    # colunas DateTime guardam UTC sem tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _offset(raw: Optional[str]) -> timezone:
    if not raw or raw in ("Z", "z"):
        return timezone.utc
    sign = -1 if raw[0] == "-" else 1
    digits = raw[1:].replace(":", "")
    return timezone(sign * timedelta(hours=int(digits[:2]), minutes=int(digits[2:])))


def parse_occurred_at(value) -> Optional[datetime]:
    """
    Converte uma string ISO-8601 (data ou data-hora, com 'Z' ou offset)
    para datetime UTC sem tzinfo. Valores sem fuso são tratados como UTC.
    Retorna None quando o valor não é uma data válida.
    """
    if not isinstance(value, str):
        return None

    raw = value.strip()
    day = parse_day(raw)
    if day is not None:
        return datetime.combine(day, time.min)

    match = _DATETIME_RE.match(raw)
    if not match:
        return None

    year, month, mday, hour, minute, second, fraction, offset = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        parsed = datetime(
            int(year), int(month), int(mday), int(hour), int(minute), int(second or 0), micro,
            tzinfo=_offset(offset),
        )
    except ValueError:
        return None

    return parsed.astimezone(timezone.utc).replace(tzinfo=None)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


def day_bucket(value: datetime) -> str:
    """Dia UTC (YYYY-MM-DD) de um datetime UTC."""
    return value.date().isoformat()


def parse_day(value) -> Optional[date]:
    if not isinstance(value, str):
        return None
    match = _DATE_RE.match(value)
    if not match:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def day_range(day: date) -> Tuple[datetime, datetime]:
    # [00:00 do dia, 00:00 do dia seguinte)
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
