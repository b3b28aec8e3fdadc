"""
Field types and validators shared by the resource schemas.
"""

from datetime import date, datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import PlainSerializer


def _utc_isoformat(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

# Stored values are naive UTC; on the wire they carry an explicit "Z"
UtcDatetime = Annotated[datetime, PlainSerializer(_utc_isoformat, return_type=str, when_used="json")]


def parse_calendar_date(value: Any) -> datetime:
    """
    Accept a calendar date ("2024-03-01") or an ISO-8601 timestamp and
    return it as a naive UTC datetime.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError("Invalid date format.")
    else:
        raise ValueError("Invalid date format.")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def strip_or_none(value: Any) -> Optional[Any]:
    """Trim optional text; blank becomes None."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def required_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value.strip()
