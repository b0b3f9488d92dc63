"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from jwt.algorithms import ECAlgorithm

from macro_tracker.adapters.whop_client import WHOP_TOKEN_ISSUER, WhopClient
from macro_tracker.config import Settings
from macro_tracker.containers import AppContainer
from macro_tracker.domain.foods import CatalogFood, CustomFood
from macro_tracker.domain.meals import (
    MealFields,
    MealFoodRecord,
    MealFoodSnapshot,
    MealRecord,
)
from macro_tracker.domain.models import MacroTarget, OwnerScope, UserRecord
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.domain.weights import WeightLog
from macro_tracker.services.custom_foods import (
    CustomFoodRepository,
    CustomFoodService,
)
from macro_tracker.services.dashboard import DashboardService
from macro_tracker.services.foods import FoodCatalogRepository, FoodSearchService
from macro_tracker.services.hydration import MealFoodHydrator
from macro_tracker.services.meals import MealRepository, MealService
from macro_tracker.services.sessions import SessionService
from macro_tracker.services.users import UserRepository, UserService
from macro_tracker.services.weights import WeightLogRepository, WeightLogService

USER_TOKEN = "token-alice"
USER_ID = "user_alice"
OTHER_TOKEN = "token-bob"
OTHER_USER_ID = "user_bob"

WHOP_SIGNING_KEY = ec.generate_private_key(ec.SECP256R1())
WHOP_PUBLIC_JWK = ECAlgorithm.to_jwk(WHOP_SIGNING_KEY.public_key())


def sign_whop_token(key=WHOP_SIGNING_KEY, **overrides: object) -> str:  # type: ignore[no-untyped-def]
    """Sign a user token the way the Whop proxy does, for app ``app_123``."""
    claims: dict[str, object] = {
        "sub": "user_1",
        "aud": "app_123",
        "iss": WHOP_TOKEN_ISSUER,
        "exp": datetime.now(tz=UTC) + timedelta(minutes=5),
    }
    claims.update(overrides)
    return jwt.encode(claims, key, algorithm="ES256")


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    targets: dict[str, MacroTarget] = field(default_factory=dict)

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(
        self, user_id: str, email: str | None, display_name: str | None
    ) -> UserRecord:
        user = UserRecord(id=user_id, email=email, display_name=display_name)
        self.users[user_id] = user
        return user

    def get_macro_target(self, user_id: str) -> MacroTarget | None:
        return self.targets.get(user_id)

    def create_macro_target(self, user_id: str, target: MacroTarget) -> MacroTarget:
        self.targets[user_id] = target
        return target

    def update_macro_target(self, user_id: str, target: MacroTarget) -> MacroTarget:
        self.targets[user_id] = target
        return target


@dataclass
class InMemoryFoodCatalogRepository(FoodCatalogRepository):
    """In-memory catalog for tests."""

    foods: dict[UUID, CatalogFood] = field(default_factory=dict)

    def add(self, **overrides: object) -> CatalogFood:
        values: dict[str, object] = {
            "id": uuid4(),
            "external_id": f"usda-{len(self.foods) + 1}",
            "source": "USDA",
            "name": "Chicken Breast",
            "brand": None,
            "serving_size": 100.0,
            "serving_unit": "g",
            "protein_per_unit": 31.0,
            "carbs_per_unit": 0.0,
            "fats_per_unit": 3.6,
            "calories_per_unit": 165.0,
        }
        values.update(overrides)
        food = CatalogFood(**values)
        self.foods[food.id] = food
        return food

    def get_food(self, food_id: UUID) -> CatalogFood | None:
        return self.foods.get(food_id)

    def search_foods(self, query: str | None, limit: int) -> list[CatalogFood]:
        matches = [
            food for food in self.foods.values() if _matches(food.name, food.brand, query)
        ]
        return sorted(matches, key=lambda food: food.name)[:limit]


@dataclass
class InMemoryCustomFoodRepository(CustomFoodRepository):
    """In-memory custom food repository for tests."""

    foods: dict[UUID, CustomFood] = field(default_factory=dict)

    def list_custom_foods(self, scope: OwnerScope) -> list[CustomFood]:
        owned = [
            food
            for food in self.foods.values()
            if scope.owns(food.user_id, food.experience_id)
        ]
        return sorted(owned, key=lambda food: food.updated_at, reverse=True)

    def search_custom_foods(
        self, scope: OwnerScope, query: str | None, limit: int
    ) -> list[CustomFood]:
        matches = [
            food
            for food in self.list_custom_foods(scope)
            if _matches(food.name, food.brand, query)
        ]
        return sorted(matches, key=lambda food: food.name)[:limit]

    def get_custom_food(self, food_id: UUID) -> CustomFood | None:
        return self.foods.get(food_id)

    def create_custom_food(
        self, scope: OwnerScope, payload: dict[str, object]
    ) -> CustomFood:
        food = CustomFood(
            id=uuid4(),
            user_id=scope.user_id,
            experience_id=scope.experience_id,
            name=str(payload["name"]),
            brand=payload.get("brand"),
            serving_size=float(payload["serving_size"]),
            serving_unit=str(payload["serving_unit"]),
            protein_per_unit=float(payload["protein_per_unit"]),
            carbs_per_unit=float(payload["carbs_per_unit"]),
            fats_per_unit=float(payload["fats_per_unit"]),
            calories_per_unit=payload.get("calories_per_unit"),
            updated_at=datetime.now(tz=UTC),
        )
        self.foods[food.id] = food
        return food

    def update_custom_food(
        self, food_id: UUID, payload: dict[str, object]
    ) -> CustomFood:
        food = replace(self.foods[food_id], **payload, updated_at=datetime.now(tz=UTC))
        self.foods[food_id] = food
        return food

    def delete_custom_food(self, food_id: UUID) -> None:
        self.foods.pop(food_id, None)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository; line items live in their own table."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)
    meal_foods: dict[UUID, MealFoodRecord] = field(default_factory=dict)

    def list_meals(
        self, scope: OwnerScope, start: datetime, end: datetime
    ) -> list[MealRecord]:
        meals = [
            self._with_foods(meal)
            for meal in self.meals.values()
            if scope.owns(meal.user_id, meal.experience_id)
            and start <= meal.logged_at < end
        ]
        return sorted(meals, key=lambda meal: meal.logged_at)

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        meal = self.meals.get(meal_id)
        return self._with_foods(meal) if meal else None

    def create_meal(
        self,
        scope: OwnerScope,
        fields: MealFields,
        totals: MacroTotals,
        foods: list[MealFoodSnapshot],
    ) -> UUID:
        meal_id = uuid4()
        self.meals[meal_id] = MealRecord(
            id=meal_id,
            user_id=scope.user_id,
            experience_id=scope.experience_id,
            name=fields.name,
            logged_at=fields.logged_at,
            notes=fields.notes,
            protein=totals.protein,
            carbs=totals.carbs,
            fats=totals.fats,
            foods=[],
        )
        self._insert_foods(meal_id, foods)
        return meal_id

    def update_meal(self, meal_id: UUID, fields: MealFields, totals: MacroTotals) -> None:
        self.meals[meal_id] = replace(
            self.meals[meal_id],
            name=fields.name,
            logged_at=fields.logged_at,
            notes=fields.notes,
            protein=totals.protein,
            carbs=totals.carbs,
            fats=totals.fats,
        )

    def replace_meal_foods(self, meal_id: UUID, foods: list[MealFoodSnapshot]) -> None:
        self._delete_foods(meal_id)
        self._insert_foods(meal_id, foods)

    def delete_meal(self, meal_id: UUID) -> None:
        self._delete_foods(meal_id)
        self.meals.pop(meal_id, None)

    def foods_for(self, meal_id: UUID) -> list[MealFoodRecord]:
        return [food for food in self.meal_foods.values() if food.meal_id == meal_id]

    def _with_foods(self, meal: MealRecord) -> MealRecord:
        return replace(meal, foods=self.foods_for(meal.id))

    def _insert_foods(self, meal_id: UUID, foods: list[MealFoodSnapshot]) -> None:
        for snapshot in foods:
            record = MealFoodRecord(id=uuid4(), meal_id=meal_id, snapshot=snapshot)
            self.meal_foods[record.id] = record

    def _delete_foods(self, meal_id: UUID) -> None:
        for food in self.foods_for(meal_id):
            del self.meal_foods[food.id]


@dataclass
class InMemoryWeightLogRepository(WeightLogRepository):
    """In-memory weigh-in repository for tests."""

    logs: dict[UUID, WeightLog] = field(default_factory=dict)

    def list_weight_logs(
        self, scope: OwnerScope, limit: int | None, descending: bool
    ) -> list[WeightLog]:
        owned = sorted(
            (
                log
                for log in self.logs.values()
                if scope.owns(log.user_id, log.experience_id)
            ),
            key=lambda log: log.recorded_for,
            reverse=descending,
        )
        return owned if limit is None else owned[:limit]

    def get_weight_log(self, log_id: UUID) -> WeightLog | None:
        return self.logs.get(log_id)

    def create_weight_log(
        self, scope: OwnerScope, payload: dict[str, object]
    ) -> WeightLog:
        log = WeightLog(
            id=uuid4(),
            user_id=scope.user_id,
            experience_id=scope.experience_id,
            weight_lbs=float(payload["weight_lbs"]),
            recorded_for=payload["recorded_for"],
            note=payload.get("note"),
        )
        self.logs[log.id] = log
        return log

    def update_weight_log(self, log_id: UUID, payload: dict[str, object]) -> WeightLog:
        log = replace(self.logs[log_id], **payload)
        self.logs[log_id] = log
        return log

    def delete_weight_log(self, log_id: UUID) -> None:
        self.logs.pop(log_id, None)


@dataclass
class FakeWhopClient(WhopClient):
    """Fake Whop client that maps tokens to user ids."""

    tokens: dict[str, str] = field(
        default_factory=lambda: {USER_TOKEN: USER_ID, OTHER_TOKEN: OTHER_USER_ID}
    )
    profiles: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            USER_ID: {"email": "alice@example.com", "name": "Alice"},
        }
    )
    profile_error: Exception | None = None
    closed: bool = False

    async def verify_user_token(self, token: str) -> str | None:
        return self.tokens.get(token)

    async def retrieve_user(self, user_id: str) -> dict[str, object]:
        if self.profile_error is not None:
            raise self.profile_error
        return self.profiles.get(user_id, {})

    async def close(self) -> None:
        self.closed = True


def _matches(name: str, brand: str | None, query: str | None) -> bool:
    if not query:
        return True
    needle = query.lower()
    return needle in name.lower() or needle in (brand or "").lower()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        whop_api_key="whop-key",
        whop_app_id="app_123",
        timezone="UTC",
    )


@pytest.fixture
def timezone() -> ZoneInfo:
    return ZoneInfo("UTC")


@pytest.fixture
def whop_client() -> FakeWhopClient:
    return FakeWhopClient()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def catalog_repository() -> InMemoryFoodCatalogRepository:
    return InMemoryFoodCatalogRepository()


@pytest.fixture
def custom_food_repository() -> InMemoryCustomFoodRepository:
    return InMemoryCustomFoodRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def weight_repository() -> InMemoryWeightLogRepository:
    return InMemoryWeightLogRepository()


@pytest.fixture
def hydrator(
    catalog_repository: InMemoryFoodCatalogRepository,
    custom_food_repository: InMemoryCustomFoodRepository,
) -> MealFoodHydrator:
    return MealFoodHydrator(
        catalog_repository=catalog_repository,
        custom_food_repository=custom_food_repository,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    timezone: ZoneInfo,
    whop_client: FakeWhopClient,
    user_repository: InMemoryUserRepository,
    catalog_repository: InMemoryFoodCatalogRepository,
    custom_food_repository: InMemoryCustomFoodRepository,
    meal_repository: InMemoryMealRepository,
    weight_repository: InMemoryWeightLogRepository,
    hydrator: MealFoodHydrator,
) -> AppContainer:
    user_service = UserService(user_repository, whop_client)

    async def close_resources() -> None:
        await whop_client.close()

    return AppContainer(
        settings=settings,
        whop_client=whop_client,
        user_service=user_service,
        session_service=SessionService(whop_client, user_service),
        food_search_service=FoodSearchService(
            catalog_repository=catalog_repository,
            custom_food_repository=custom_food_repository,
        ),
        custom_food_service=CustomFoodService(custom_food_repository),
        meal_service=MealService(
            repository=meal_repository, hydrator=hydrator, timezone=timezone
        ),
        weight_log_service=WeightLogService(weight_repository),
        dashboard_service=DashboardService(
            meal_repository=meal_repository,
            weight_repository=weight_repository,
            custom_food_repository=custom_food_repository,
            timezone=timezone,
            goal_slope=settings.weight_goal_slope,
        ),
        close_resources=close_resources,
    )
