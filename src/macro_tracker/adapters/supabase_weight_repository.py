"""Supabase repository for weigh-ins."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from macro_tracker.adapters.supabase_filters import apply_scope, parse_timestamp, to_row
from macro_tracker.domain.models import OwnerScope
from macro_tracker.domain.weights import WeightLog
from macro_tracker.services.weights import WeightLogRepository


@dataclass
class SupabaseWeightLogRepository(WeightLogRepository):
    """Supabase implementation for weight logs."""

    client: Client

    def list_weight_logs(
        self, scope: OwnerScope, limit: int | None, descending: bool
    ) -> list[WeightLog]:
        """Return weigh-ins ordered by recorded date."""
        query = apply_scope(self.client.table("weight_logs").select("*"), scope)
        query = query.order("recorded_for", desc=descending)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_parse_log(row) for row in response.data or []]

    def get_weight_log(self, log_id: UUID) -> WeightLog | None:
        """Return a weigh-in by id, if present."""
        response = (
            self.client.table("weight_logs")
            .select("*")
            .eq("id", str(log_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])

    def create_weight_log(
        self, scope: OwnerScope, payload: dict[str, object]
    ) -> WeightLog:
        """Create a weigh-in and return it."""
        response = (
            self.client.table("weight_logs")
            .insert(
                {
                    "user_id": scope.user_id,
                    "experience_id": scope.experience_id,
                    **to_row(payload),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight log")
        return _parse_log(response.data[0])

    def update_weight_log(self, log_id: UUID, payload: dict[str, object]) -> WeightLog:
        """Update a weigh-in and return it."""
        response = (
            self.client.table("weight_logs")
            .update(to_row(payload))
            .eq("id", str(log_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update weight log")
        return _parse_log(response.data[0])

    def delete_weight_log(self, log_id: UUID) -> None:
        """Delete a weigh-in."""
        self.client.table("weight_logs").delete().eq("id", str(log_id)).execute()


def _parse_log(row: dict[str, object]) -> WeightLog:
    return WeightLog(
        id=UUID(str(row["id"])),
        user_id=str(row["user_id"]),
        experience_id=row.get("experience_id"),
        weight_lbs=float(row.get("weight_lbs", 0.0)),
        recorded_for=parse_timestamp(row.get("recorded_for")) or datetime.min,
        note=row.get("note"),
    )
