"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from supabase import Client, create_client

from macro_tracker.adapters.supabase_custom_food_repository import (
    SupabaseCustomFoodRepository,
)
from macro_tracker.adapters.supabase_food_repository import (
    SupabaseFoodCatalogRepository,
)
from macro_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from macro_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from macro_tracker.adapters.supabase_weight_repository import (
    SupabaseWeightLogRepository,
)
from macro_tracker.adapters.unconfigured_supabase import UnconfiguredSupabaseClient
from macro_tracker.adapters.whop_client import (
    HttpxWhopClient,
    UnconfiguredWhopClient,
    WhopClient,
)
from macro_tracker.config import Settings, missing_supabase_settings, missing_whop_settings
from macro_tracker.services.custom_foods import CustomFoodService
from macro_tracker.services.dashboard import DashboardService
from macro_tracker.services.foods import FoodSearchService
from macro_tracker.services.hydration import MealFoodHydrator
from macro_tracker.services.meals import MealService
from macro_tracker.services.sessions import SessionService
from macro_tracker.services.users import UserService
from macro_tracker.services.weights import WeightLogService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    whop_client: WhopClient
    user_service: UserService
    session_service: SessionService
    food_search_service: FoodSearchService
    custom_food_service: CustomFoodService
    meal_service: MealService
    weight_log_service: WeightLogService
    dashboard_service: DashboardService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timezone = ZoneInfo(resolved_settings.timezone)
    supabase_client = _supabase_client(resolved_settings)
    whop_client = _whop_client(resolved_settings)

    user_repository = SupabaseUserRepository(supabase_client)
    catalog_repository = SupabaseFoodCatalogRepository(supabase_client)
    custom_food_repository = SupabaseCustomFoodRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    weight_repository = SupabaseWeightLogRepository(supabase_client)

    user_service = UserService(user_repository, whop_client)
    session_service = SessionService(whop_client, user_service)
    hydrator = MealFoodHydrator(
        catalog_repository=catalog_repository,
        custom_food_repository=custom_food_repository,
    )

    async def close_resources() -> None:
        await whop_client.close()

    return AppContainer(
        settings=resolved_settings,
        whop_client=whop_client,
        user_service=user_service,
        session_service=session_service,
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
            goal_slope=resolved_settings.weight_goal_slope,
        ),
        close_resources=close_resources,
    )


def _supabase_client(settings: Settings) -> Client | UnconfiguredSupabaseClient:
    missing = missing_supabase_settings(settings)
    if missing:
        return UnconfiguredSupabaseClient(missing)
    return create_client(settings.supabase_url, settings.supabase_service_key)


def _whop_client(settings: Settings) -> HttpxWhopClient | UnconfiguredWhopClient:
    missing = missing_whop_settings(settings)
    if missing:
        return UnconfiguredWhopClient(missing)
    return HttpxWhopClient.create(
        api_key=settings.whop_api_key,
        app_id=settings.whop_app_id,
        base_url=settings.whop_base_url,
        token_jwk=settings.whop_token_jwk,
    )
