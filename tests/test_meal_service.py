"""Tests for meal logging service."""

from datetime import UTC, date, datetime
from uuid import uuid4
from zoneinfo import ZoneInfo

import pytest

from macro_tracker.domain.meals import (
    CatalogLineInput,
    MealFields,
    QuickAddLineInput,
)
from macro_tracker.domain.models import OwnerScope
from macro_tracker.domain.nutrition import MacroValues
from macro_tracker.errors import NotFoundError
from macro_tracker.services.hydration import MealFoodHydrator
from macro_tracker.services.meals import MealService
from tests.conftest import InMemoryFoodCatalogRepository, InMemoryMealRepository

SCOPE = OwnerScope(user_id="user_alice", experience_id=None)


def _quick(protein: float = 30, carbs: float = 40, fats: float = 10) -> QuickAddLineInput:
    return QuickAddLineInput(
        name="Quick add",
        quantity=1,
        macros=MacroValues(protein=protein, carbs=carbs, fats=fats),
    )


def _fields(logged_at: datetime, name: str = "Lunch") -> MealFields:
    return MealFields(name=name, logged_at=logged_at, notes=None)


@pytest.fixture
def service(
    meal_repository: InMemoryMealRepository, hydrator: MealFoodHydrator
) -> MealService:
    return MealService(
        repository=meal_repository, hydrator=hydrator, timezone=ZoneInfo("UTC")
    )


def test_create_meal_stores_snapshot_totals(service: MealService) -> None:
    meal = service.create_meal(
        SCOPE,
        _fields(datetime(2024, 5, 1, 12, tzinfo=UTC)),
        [_quick(), _quick(protein=5, carbs=0, fats=0)],
    )

    assert (meal.protein, meal.carbs, meal.fats) == (35, 40, 10)
    assert len(meal.foods) == 2
    assert meal.user_id == "user_alice"
    assert meal.experience_id is None


def test_meal_totals_survive_catalog_edits(
    service: MealService, catalog_repository: InMemoryFoodCatalogRepository
) -> None:
    food = catalog_repository.add(protein_per_unit=20, fats_per_unit=0)
    meal = service.create_meal(
        SCOPE,
        _fields(datetime(2024, 5, 1, 12, tzinfo=UTC)),
        [CatalogLineInput(food_id=food.id, quantity=2)],
    )

    catalog_repository.add(id=food.id, protein_per_unit=50, fats_per_unit=0)
    fetched = service.get_meal(SCOPE, meal.id)

    assert fetched.protein == 40
    assert fetched.protein == sum(item.snapshot.protein for item in fetched.foods)


def test_list_meals_for_day_uses_local_calendar(
    meal_repository: InMemoryMealRepository, hydrator: MealFoodHydrator
) -> None:
    service = MealService(
        repository=meal_repository,
        hydrator=hydrator,
        timezone=ZoneInfo("America/New_York"),
    )
    service.create_meal(SCOPE, _fields(datetime(2024, 5, 9, 2, tzinfo=UTC)), [_quick()])
    service.create_meal(
        SCOPE, _fields(datetime(2024, 5, 9, 15, tzinfo=UTC), "Late"), [_quick()]
    )

    meals = service.list_meals_for_day(SCOPE, date(2024, 5, 8))

    assert [meal.name for meal in meals] == ["Lunch"]


def test_meals_are_scoped_by_experience(service: MealService) -> None:
    moment = datetime(2024, 5, 1, 12, tzinfo=UTC)
    tenant = OwnerScope(user_id="user_alice", experience_id="exp_1")
    meal = service.create_meal(tenant, _fields(moment), [_quick()])

    assert service.list_meals_for_day(SCOPE, date(2024, 5, 1)) == []
    with pytest.raises(NotFoundError, match="Meal not found."):
        service.get_meal(SCOPE, meal.id)
    assert service.get_meal(tenant, meal.id).id == meal.id


def test_update_meal_replaces_items_and_totals(service: MealService) -> None:
    meal = service.create_meal(
        SCOPE, _fields(datetime(2024, 5, 1, 12, tzinfo=UTC)), [_quick(), _quick()]
    )

    updated = service.update_meal(
        SCOPE, meal.id, lines=[_quick(protein=10, carbs=0, fats=0)]
    )

    assert len(updated.foods) == 1
    assert (updated.protein, updated.carbs, updated.fats) == (10, 0, 0)
    assert updated.name == "Lunch"


def test_update_meal_keeps_unsent_fields(service: MealService) -> None:
    meal = service.create_meal(
        SCOPE,
        MealFields(
            name="Lunch", logged_at=datetime(2024, 5, 1, 12, tzinfo=UTC), notes="tasty"
        ),
        [_quick()],
    )

    updated = service.update_meal(SCOPE, meal.id, name="Dinner", lines=[])

    assert updated.name == "Dinner"
    assert updated.notes == "tasty"
    assert updated.logged_at == meal.logged_at
    assert len(updated.foods) == 1
    assert updated.protein == 30


def test_delete_meal_removes_line_items(
    service: MealService, meal_repository: InMemoryMealRepository
) -> None:
    meal = service.create_meal(
        SCOPE, _fields(datetime(2024, 5, 1, 12, tzinfo=UTC)), [_quick(), _quick()]
    )

    service.delete_meal(SCOPE, meal.id)

    assert meal_repository.foods_for(meal.id) == []
    with pytest.raises(NotFoundError):
        service.get_meal(SCOPE, meal.id)


def test_delete_unknown_meal_is_not_found(service: MealService) -> None:
    with pytest.raises(NotFoundError):
        service.delete_meal(SCOPE, uuid4())


class _FailingUpdateRepository(InMemoryMealRepository):
    def update_meal(self, meal_id, fields, totals) -> None:  # type: ignore[no-untyped-def]
        raise RuntimeError("meals update failed")


def test_failed_update_restores_previous_items(hydrator: MealFoodHydrator) -> None:
    repository = _FailingUpdateRepository()
    service = MealService(
        repository=repository, hydrator=hydrator, timezone=ZoneInfo("UTC")
    )
    meal = service.create_meal(
        SCOPE, _fields(datetime(2024, 5, 1, 12, tzinfo=UTC)), [_quick(protein=10)]
    )

    with pytest.raises(RuntimeError, match="meals update failed"):
        service.update_meal(SCOPE, meal.id, lines=[_quick(protein=50)])

    stored = repository.get_meal(meal.id)
    assert stored is not None
    assert stored.protein == 10
    assert sum(food.snapshot.protein for food in stored.foods) == stored.protein
