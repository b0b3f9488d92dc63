"""Shared PostgREST filter helpers."""

import re
from datetime import datetime

from macro_tracker.domain.models import OwnerScope

_PATTERN_UNSAFE = re.compile(r"[,()*%_\"\\]")


def apply_scope(query, scope: OwnerScope):  # type: ignore[no-untyped-def]
    """Filter a query to rows owned by ``scope``; null tenant matches null."""
    query = query.eq("user_id", scope.user_id)
    if scope.experience_id is None:
        return query.is_("experience_id", "null")
    return query.eq("experience_id", scope.experience_id)


def name_or_brand_filter(query_text: str) -> str:
    """Build an ``or`` filter matching name or brand case-insensitively."""
    cleaned = _PATTERN_UNSAFE.sub(" ", query_text).strip()
    return f"name.ilike.*{cleaned}*,brand.ilike.*{cleaned}*"


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp column, if present."""
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def to_row(payload: dict[str, object]) -> dict[str, object]:
    """Serialize datetimes in a payload to ISO strings."""
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in payload.items()
    }


def optional_float(value: object) -> float | None:
    """Return a float for numeric columns, keeping nulls."""
    if value is None:
        return None
    return float(value)
