"""Dashboard summary endpoint and server-rendered pages."""

import logging
from datetime import tzinfo
from pathlib import Path

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from macro_tracker.api.dependencies import get_container, parse_day, require_session
from macro_tracker.api.serializers import serialize_dashboard
from macro_tracker.containers import AppContainer
from macro_tracker.domain.meals import MealFoodRecord
from macro_tracker.domain.models import Session
from macro_tracker.domain.reporting import DashboardSummary, MealSummary
from macro_tracker.errors import ConfigurationError, ValidationError
from macro_tracker.services.reporting import round_half_up

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])

templates = Jinja2Templates(
    directory=Path(__file__).resolve().parent.parent / "templates"
)

TREND_POINTS = 14


@router.get("/api/dashboard")
async def dashboard_summary(
    date: str | None = None,
    session: Session = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return totals, compliance, week grid and weight trend for a day."""
    service = container.dashboard_service
    day = parse_day(date, service.timezone)
    summary = service.build(session.scope, session.macro_target, day)
    return {"data": serialize_dashboard(summary)}


@router.get("/", response_class=HTMLResponse)
async def home_page(
    request: Request,
    date: str | None = None,
    container: AppContainer = Depends(get_container),
    x_whop_user_token: str | None = Header(default=None),
    x_whop_experience_id: str | None = Header(default=None),
) -> HTMLResponse:
    """Render the dashboard outside any experience."""
    return await _render_dashboard(
        request, container, x_whop_user_token, x_whop_experience_id, date
    )


@router.get("/experiences/{experience_id}", response_class=HTMLResponse)
async def experience_page(
    request: Request,
    experience_id: str,
    date: str | None = None,
    container: AppContainer = Depends(get_container),
    x_whop_user_token: str | None = Header(default=None),
) -> HTMLResponse:
    """Render the dashboard for a Whop experience."""
    return await _render_dashboard(
        request, container, x_whop_user_token, experience_id, date
    )


async def _render_dashboard(
    request: Request,
    container: AppContainer,
    token: str | None,
    experience_id: str | None,
    date: str | None,
) -> HTMLResponse:
    session = await container.session_service.optional_session(token, experience_id)
    if session is None:
        return _page(request, "guest.html", experience_id)
    service = container.dashboard_service
    try:
        day = parse_day(date, service.timezone)
    except ValidationError:
        day = None
    try:
        summary = service.build(session.scope, session.macro_target, day)
    except ConfigurationError as exc:
        logger.warning("Dashboard storage not configured: %s", exc)
        return _page(request, "guest.html", experience_id)
    except Exception:
        logger.exception("Failed to load dashboard data")
        return _page(request, "unavailable.html", experience_id)
    return templates.TemplateResponse(
        request, "dashboard.html", _dashboard_context(session, summary, service.timezone)
    )


def _page(request: Request, name: str, experience_id: str | None) -> HTMLResponse:
    return templates.TemplateResponse(request, name, {"experience_id": experience_id})


def _format_food(food: MealFoodRecord) -> str:
    snapshot = food.snapshot
    quantity = round_half_up(snapshot.quantity)
    unit = snapshot.serving_unit or "x serving"
    brand = f" ({snapshot.brand})" if snapshot.brand else ""
    return (
        f"{snapshot.name}{brand}: {quantity:g} {unit} "
        f"· P {snapshot.protein:g} C {snapshot.carbs:g} F {snapshot.fats:g}"
    )


def _meal_card(item: MealSummary, tz: tzinfo) -> dict[str, object]:
    meal = item.meal
    return {
        "name": meal.name,
        "time": meal.logged_at.astimezone(tz).strftime("%H:%M"),
        "calories": item.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fats": meal.fats,
        "foods": [_format_food(food) for food in meal.foods],
        "notes": meal.notes,
    }


def _dashboard_context(
    session: Session, summary: DashboardSummary, tz: tzinfo
) -> dict[str, object]:
    target = summary.macro_target
    consumed = summary.consumed
    if summary.weekly_change is None:
        weekly_change = "Not enough history for a weekly change"
    else:
        weekly_change = f"{summary.weekly_change:+g} lb this week"
    latest = summary.latest_weight
    return {
        "experience_id": session.experience_id,
        "name": session.user.display_name or session.user.email or "there",
        "summary": summary,
        "target": target,
        "macro_rows": [
            {"label": "Protein", "eaten": consumed.protein, "goal": target.protein},
            {"label": "Carbs", "eaten": consumed.carbs, "goal": target.carbs},
            {"label": "Fats", "eaten": consumed.fats, "goal": target.fats},
        ],
        "week": [
            {
                "iso": day.day.isoformat(),
                "label": day.day.strftime("%a %d"),
                "compliance": day.compliance,
                "is_selected": day.is_selected,
                "has_entries": day.has_entries,
            }
            for day in summary.week
        ],
        "meals": [_meal_card(item, tz) for item in summary.meals],
        "latest_weight": None if latest is None else latest.weight_lbs,
        "weekly_change": weekly_change,
        "trend": summary.weight_series[-TREND_POINTS:],
    }
