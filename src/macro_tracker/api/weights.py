"""Weigh-in endpoints."""

from datetime import tzinfo
from uuid import UUID

from fastapi import APIRouter, Depends, status

from macro_tracker.api.dependencies import (
    get_container,
    localize,
    parse_id,
    require_session,
)
from macro_tracker.api.schemas import WeightCreate, WeightUpdate
from macro_tracker.api.serializers import serialize_weight_log
from macro_tracker.containers import AppContainer
from macro_tracker.domain.models import Session

router = APIRouter(prefix="/api/weights", tags=["weights"])


@router.get("")
async def list_weights(
    limit: int | None = None,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return recent weigh-ins, newest first."""
    logs = container.weight_log_service.recent(session.scope, limit)
    return {"data": [serialize_weight_log(log) for log in logs]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_weight(
    payload: WeightCreate,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Record a weigh-in."""
    values = payload.model_dump()
    values["recorded_for"] = localize(payload.recorded_for, _timezone(container))
    log = container.weight_log_service.create_log(session.scope, values)
    return {"data": serialize_weight_log(log)}


@router.patch("/{log_id}")
async def update_weight(
    log_id: str,
    payload: WeightUpdate,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update the fields sent for a weigh-in."""
    changes = payload.changes()
    if "recorded_for" in changes:
        changes["recorded_for"] = localize(
            payload.recorded_for, _timezone(container)
        )
    log = container.weight_log_service.update_log(
        session.scope, _log_id(log_id), changes
    )
    return {"data": serialize_weight_log(log)}


@router.delete("/{log_id}")
async def delete_weight(
    log_id: str,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    """Delete a weigh-in."""
    container.weight_log_service.delete_log(session.scope, _log_id(log_id))
    return {"success": True}


def _timezone(container: AppContainer) -> tzinfo:
    return container.dashboard_service.timezone


def _log_id(value: str) -> UUID:
    return parse_id(value, "Weight log not found.")
