"""Shared FastAPI dependencies for session and container access."""

from datetime import date, datetime, tzinfo
from uuid import UUID

from fastapi import Depends, Header, Request

from macro_tracker.containers import AppContainer
from macro_tracker.domain.models import Session
from macro_tracker.errors import NotFoundError, ValidationError


def get_container(request: Request) -> AppContainer:
    """Return the container stored on the app."""
    return request.app.state.container


async def require_session(
    container: AppContainer = Depends(get_container),
    x_whop_user_token: str | None = Header(default=None),
    x_whop_experience_id: str | None = Header(default=None),
) -> Session:
    """Resolve the caller or fail the request with 401."""
    return await container.session_service.require_session(
        x_whop_user_token, x_whop_experience_id
    )


def localize(value: datetime, tz: tzinfo) -> datetime:
    """Interpret naive timestamps in the dashboard timezone."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value


def parse_day(value: str | None, tz: tzinfo) -> date | None:
    """Parse a ``date`` query value as a day or ISO timestamp."""
    if value is None or not value.strip():
        return None
    cleaned = value.strip()
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass
    try:
        moment = datetime.fromisoformat(cleaned.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValidationError("Invalid date.", field="date") from exc
    return localize(moment, tz).astimezone(tz).date()


def parse_id(value: str, message: str) -> UUID:
    """Parse a path id; anything that is not a UUID cannot exist."""
    try:
        return UUID(value)
    except ValueError as exc:
        raise NotFoundError(message) from exc
