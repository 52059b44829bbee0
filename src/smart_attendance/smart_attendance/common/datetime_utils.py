from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def require_iso_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def optional_iso_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_iso_date(value, field_name)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_json_date(value: Optional[date]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


def to_json_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
