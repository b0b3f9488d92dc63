"""Meal logging endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from macro_tracker.api.dependencies import (
    get_container,
    localize,
    parse_day,
    parse_id,
    require_session,
)
from macro_tracker.api.schemas import MealCreate, MealUpdate
from macro_tracker.api.serializers import serialize_meal
from macro_tracker.containers import AppContainer
from macro_tracker.domain.meals import MealFields
from macro_tracker.domain.models import Session

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.get("")
async def list_meals(
    date: str | None = None,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's meals for a local day, today by default."""
    service = container.meal_service
    day = parse_day(date, service.timezone) or container.dashboard_service.today()
    meals = service.list_meals_for_day(session.scope, day)
    return {"data": [serialize_meal(meal) for meal in meals]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal(
    payload: MealCreate,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log a meal with its line items."""
    service = container.meal_service
    fields = MealFields(
        name=payload.name,
        logged_at=localize(payload.logged_at, service.timezone),
        notes=payload.notes,
    )
    meal = service.create_meal(session.scope, fields, payload.lines())
    return {"data": serialize_meal(meal)}


@router.get("/{meal_id}")
async def get_meal(
    meal_id: str,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return one meal with its line items."""
    meal = container.meal_service.get_meal(session.scope, _meal_id(meal_id))
    return {"data": serialize_meal(meal)}


@router.patch("/{meal_id}")
async def update_meal(
    meal_id: str,
    payload: MealUpdate,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update a meal; a non-empty ``foods`` list replaces its line items."""
    service = container.meal_service
    logged_at = (
        localize(payload.logged_at, service.timezone) if payload.logged_at else None
    )
    meal = service.update_meal(
        session.scope,
        _meal_id(meal_id),
        name=payload.name,
        logged_at=logged_at,
        notes=payload.notes,
        lines=payload.lines(),
    )
    return {"data": serialize_meal(meal)}


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: str,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    """Delete a meal and its line items."""
    container.meal_service.delete_meal(session.scope, _meal_id(meal_id))
    return {"success": True}


def _meal_id(value: str) -> UUID:
    return parse_id(value, "Meal not found.")
