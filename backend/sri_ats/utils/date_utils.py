import re
from datetime import datetime, date
from typing import Optional, Union
from zoneinfo import ZoneInfo

from sri_ats.config.settings import settings

_SRI_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_SRI_DATETIME = re.compile(r"^(\d{2})/(\d{2})/(\d{4})\s+(\d{2}):(\d{2}):(\d{2})$")
_SRI_PERIOD = re.compile(r"^(\d{2})/(\d{4})$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def try_parse_date(value):
    if not value:
        return None

    for fmt in ("%Y-%m-%d", "%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def parse_sri_date(value: str) -> str:
    """DD/MM/YYYY -> YYYY-MM-DD. Otros formatos se devuelven sin cambios."""
    if not value:
        return ""
    match = _SRI_DATE.match(value)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month}-{day}"
    return value


def parse_sri_datetime(value: str) -> str:
    """DD/MM/YYYY HH:mm:ss -> YYYY-MM-DDTHH:mm:ss. ISO u otros formatos sin cambios."""
    if not value:
        return ""
    match = _SRI_DATETIME.match(value)
    if match:
        day, month, year, hour, minute, second = match.groups()
        return f"{year}-{month}-{day}T{hour}:{minute}:{second}"
    return value


def parse_sri_period(value: str) -> str:
    """MM/YYYY -> YYYY-MM (periodoFiscal de retenciones)."""
    if not value:
        return ""
    match = _SRI_PERIOD.match(value)
    if match:
        month, year = match.groups()
        return f"{year}-{month}"
    return value


def format_to_sri_date(value: str) -> str:
    """YYYY-MM-DD -> DD/MM/YYYY para exportaciones."""
    if not value:
        return ""
    match = _ISO_DATE.match(value)
    if match:
        year, month, day = match.groups()
        return f"{day}/{month}/{year}"
    return value


def get_period(value: Union[datetime, date]) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def now_local(tz_name: Optional[str] = None) -> datetime:
    return datetime.now(ZoneInfo(tz_name or settings.TIMEZONE))


def current_period() -> str:
    """Período YYYY-MM actual en la zona horaria configurada."""
    return get_period(now_local())
