from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..core.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(data: Mapping[str, Any], fields: Sequence[str]) -> dict[str, Any]:
    """Return the requested fields, or fail listing all of them if any is missing."""
    if any(is_blank(data.get(f)) for f in fields):
        raise ValidationError(f"All fields are required: {', '.join(fields)}")
    return {f: data.get(f) for f in fields}


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def optional_int(value: Any, field_name: str) -> int | None:
    if is_blank(value):
        return None
    return require_int(value, field_name)
