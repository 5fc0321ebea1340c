"""Input checks shared by the domain services.

Each helper returns the cleaned value or raises ``ValidationError`` naming the
offending field, so services can validate everything before touching storage.
"""

from datetime import date, datetime
from typing import Any, Optional

from clinic_inventory.core.exceptions import ValidationError


def require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            message=f"{field} must not be empty",
            details={"field": field}
        )
    return value.strip()


def optional_text(field: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(
            message=f"{field} must be a string",
            details={"field": field}
        )
    return value


def require_int(field: str, value: Any, minimum: int) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            message=f"{field} must be an integer",
            details={"field": field, "value": str(value)}
        )
    if value < minimum:
        raise ValidationError(
            message=f"{field} must be at least {minimum}",
            details={"field": field, "value": value}
        )
    return value


def require_date(field: str, value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationError(
        message=f"{field} must be a calendar date (YYYY-MM-DD)",
        details={"field": field, "value": str(value)}
    )


def check_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date and end_date and start_date > end_date:
        raise ValidationError(
            message="start_date must not be after end_date",
            details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()}
        )
