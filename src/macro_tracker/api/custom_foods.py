"""Custom food endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from macro_tracker.api.dependencies import get_container, parse_id, require_session
from macro_tracker.api.schemas import CustomFoodCreate, CustomFoodUpdate
from macro_tracker.api.serializers import serialize_custom_food
from macro_tracker.containers import AppContainer
from macro_tracker.domain.models import Session

router = APIRouter(prefix="/api/custom-foods", tags=["custom-foods"])


@router.get("")
async def list_custom_foods(
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's custom foods, most recently updated first."""
    foods = container.custom_food_service.list_foods(session.scope)
    return {"data": [serialize_custom_food(food) for food in foods]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_custom_food(
    payload: CustomFoodCreate,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a custom food."""
    food = container.custom_food_service.create_food(
        session.scope, payload.model_dump()
    )
    return {"data": serialize_custom_food(food)}


@router.patch("/{food_id}")
async def update_custom_food(
    food_id: str,
    payload: CustomFoodUpdate,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update the fields sent for a custom food."""
    food = container.custom_food_service.update_food(
        session.scope, _food_id(food_id), payload.changes()
    )
    return {"data": serialize_custom_food(food)}


@router.delete("/{food_id}")
async def delete_custom_food(
    food_id: str,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    """Delete a custom food; logged meals keep their snapshots."""
    container.custom_food_service.delete_food(session.scope, _food_id(food_id))
    return {"success": True}


def _food_id(value: str) -> UUID:
    return parse_id(value, "Food not found.")
