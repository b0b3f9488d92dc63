"""Tests for weigh-in service."""

from datetime import UTC, datetime, timedelta

import pytest

from macro_tracker.domain.models import OwnerScope
from macro_tracker.errors import NotFoundError
from macro_tracker.services.weights import WeightLogService
from tests.conftest import InMemoryWeightLogRepository

SCOPE = OwnerScope(user_id="user_alice", experience_id=None)
START = datetime(2024, 5, 1, 7, tzinfo=UTC)


def _seed(service: WeightLogService, count: int) -> None:
    for index in range(count):
        service.create_log(
            SCOPE,
            {
                "weight_lbs": 200 - index,
                "recorded_for": START + timedelta(days=index),
                "note": None,
            },
        )


def test_recent_returns_newest_first_with_default_limit() -> None:
    service = WeightLogService(InMemoryWeightLogRepository())
    _seed(service, 40)

    recent = service.recent(SCOPE)

    assert len(recent) == 30
    assert recent[0].weight_lbs == 161
    assert recent[0].recorded_for > recent[1].recorded_for


def test_recent_limit_is_clamped() -> None:
    service = WeightLogService(InMemoryWeightLogRepository())
    _seed(service, 5)

    assert len(service.recent(SCOPE, limit=0)) == 1
    assert len(service.recent(SCOPE, limit=1000)) == 5


def test_history_is_oldest_first() -> None:
    service = WeightLogService(InMemoryWeightLogRepository())
    _seed(service, 3)

    assert [log.weight_lbs for log in service.history(SCOPE)] == [200, 199, 198]


def test_update_can_clear_note() -> None:
    service = WeightLogService(InMemoryWeightLogRepository())
    log = service.create_log(
        SCOPE, {"weight_lbs": 180, "recorded_for": START, "note": "after travel"}
    )

    updated = service.update_log(SCOPE, log.id, {"note": None})

    assert updated.note is None
    assert updated.weight_lbs == 180


def test_logs_from_other_experience_are_hidden() -> None:
    service = WeightLogService(InMemoryWeightLogRepository())
    tenant = OwnerScope(user_id="user_alice", experience_id="exp_1")
    log = service.create_log(tenant, {"weight_lbs": 180, "recorded_for": START})

    assert service.recent(SCOPE) == []
    with pytest.raises(NotFoundError, match="Weight log not found."):
        service.delete_log(SCOPE, log.id)
    service.delete_log(tenant, log.id)
    assert service.recent(tenant) == []
