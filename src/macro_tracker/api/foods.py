"""Food catalog search endpoint."""

from fastapi import APIRouter, Depends

from macro_tracker.api.dependencies import get_container, require_session
from macro_tracker.api.serializers import serialize_search_result
from macro_tracker.containers import AppContainer
from macro_tracker.domain.models import Session

router = APIRouter(prefix="/api/foods", tags=["foods"])


@router.get("")
async def search_foods(
    q: str | None = None,
    limit: int | None = None,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Search catalog foods and the caller's custom foods."""
    result = container.food_search_service.search(session.scope, q, limit)
    return {"data": serialize_search_result(result)}
