"""Session and macro target endpoints."""

from fastapi import APIRouter, Depends

from macro_tracker.api.dependencies import get_container, require_session
from macro_tracker.api.schemas import MacroTargetUpdate
from macro_tracker.api.serializers import serialize_macro_target, serialize_session
from macro_tracker.containers import AppContainer
from macro_tracker.domain.models import Session

router = APIRouter(prefix="/api", tags=["account"])


@router.get("/session")
async def current_session(
    session: Session = Depends(require_session),
) -> dict[str, object]:
    """Return the resolved user, targets and experience."""
    return {"data": serialize_session(session)}


@router.get("/macro-targets")
async def get_macro_targets(
    session: Session = Depends(require_session),
) -> dict[str, object]:
    """Return the caller's daily macro targets."""
    return {"data": serialize_macro_target(session.macro_target)}


@router.put("/macro-targets")
async def update_macro_targets(
    payload: MacroTargetUpdate,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace the caller's daily macro targets."""
    target = container.user_service.update_macro_target(
        session.user.id, payload.to_domain()
    )
    return {"data": serialize_macro_target(target)}
