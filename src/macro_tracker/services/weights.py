"""Weigh-in logging service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from macro_tracker.domain.models import OwnerScope
from macro_tracker.domain.weights import WeightLog
from macro_tracker.errors import NotFoundError

DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 120


class WeightLogRepository(Protocol):
    """Persistence interface for weigh-ins."""

    def list_weight_logs(
        self, scope: OwnerScope, limit: int | None, descending: bool
    ) -> list[WeightLog]:
        """Return weigh-ins ordered by recorded date."""

    def get_weight_log(self, log_id: UUID) -> WeightLog | None:
        """Return a weigh-in by id, if present."""

    def create_weight_log(
        self, scope: OwnerScope, payload: dict[str, object]
    ) -> WeightLog:
        """Create a weigh-in and return it."""

    def update_weight_log(self, log_id: UUID, payload: dict[str, object]) -> WeightLog:
        """Update a weigh-in and return it."""

    def delete_weight_log(self, log_id: UUID) -> None:
        """Delete a weigh-in."""


@dataclass
class WeightLogService:
    """Application service for weigh-in CRUD."""

    repository: WeightLogRepository

    def recent(self, scope: OwnerScope, limit: int | None = None) -> list[WeightLog]:
        """Return the newest weigh-ins first."""
        resolved = DEFAULT_HISTORY_LIMIT if limit is None else limit
        resolved = max(1, min(resolved, MAX_HISTORY_LIMIT))
        return self.repository.list_weight_logs(scope, resolved, descending=True)

    def history(self, scope: OwnerScope) -> list[WeightLog]:
        """Return every weigh-in, oldest first."""
        return self.repository.list_weight_logs(scope, None, descending=False)

    def get_log(self, scope: OwnerScope, log_id: UUID) -> WeightLog:
        """Return an owned weigh-in or raise ``NotFoundError``."""
        log = self.repository.get_weight_log(log_id)
        if log is None or not scope.owns(log.user_id, log.experience_id):
            raise NotFoundError("Weight log not found.")
        return log

    def create_log(self, scope: OwnerScope, payload: dict[str, object]) -> WeightLog:
        """Record a weigh-in in the caller's scope."""
        return self.repository.create_weight_log(scope, payload)

    def update_log(
        self, scope: OwnerScope, log_id: UUID, payload: dict[str, object]
    ) -> WeightLog:
        """Apply a partial update to an owned weigh-in."""
        log = self.get_log(scope, log_id)
        if not payload:
            return log
        return self.repository.update_weight_log(log.id, payload)

    def delete_log(self, scope: OwnerScope, log_id: UUID) -> None:
        """Delete an owned weigh-in."""
        log = self.get_log(scope, log_id)
        self.repository.delete_weight_log(log.id)
