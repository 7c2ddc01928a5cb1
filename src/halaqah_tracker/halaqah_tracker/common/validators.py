from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} wajib diisi.")
    return value.strip()


def require_selected(value: Any, message: str) -> Any:
    if value is None or value == "":
        raise ValidationError(message)
    return value


def require_any(values: Sequence, message: str) -> Sequence:
    if not values:
        raise ValidationError(message)
    return values
