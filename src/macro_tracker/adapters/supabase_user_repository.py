"""Supabase-backed user repository."""

from dataclasses import dataclass

from supabase import Client

from macro_tracker.domain.models import MacroTarget, UserRecord
from macro_tracker.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for users and macro targets."""

    client: Client

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user for a Whop user id, if present."""
        response = (
            self.client.table("users")
            .select("id, email, display_name")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(
        self, user_id: str, email: str | None, display_name: str | None
    ) -> UserRecord:
        """Create a user row, keeping the existing row on a concurrent insert."""
        response = (
            self.client.table("users")
            .upsert(
                {"id": user_id, "email": email, "display_name": display_name},
                on_conflict="id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        existing = self.get_user(user_id)
        if existing is None:
            raise RuntimeError("Failed to create user in Supabase")
        return existing

    def get_macro_target(self, user_id: str) -> MacroTarget | None:
        """Return the macro target row for a user, if present."""
        response = (
            self.client.table("macro_targets")
            .select("calories, protein, carbs, fats")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_target(response.data[0])
        return None

    def create_macro_target(self, user_id: str, target: MacroTarget) -> MacroTarget:
        """Create the macro target row, keeping one written concurrently."""
        response = (
            self.client.table("macro_targets")
            .upsert(
                {"user_id": user_id, **_target_row(target)},
                on_conflict="user_id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if response.data:
            return _parse_target(response.data[0])
        existing = self.get_macro_target(user_id)
        if existing is None:
            raise RuntimeError("Failed to create macro target")
        return existing

    def update_macro_target(self, user_id: str, target: MacroTarget) -> MacroTarget:
        """Replace the macro target values for a user."""
        response = (
            self.client.table("macro_targets")
            .update(_target_row(target))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update macro target")
        return _parse_target(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=str(row["id"]),
        email=row.get("email"),
        display_name=row.get("display_name"),
    )


def _parse_target(row: dict[str, object]) -> MacroTarget:
    return MacroTarget(
        calories=float(row.get("calories", 0.0)),
        protein=float(row.get("protein", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        fats=float(row.get("fats", 0.0)),
    )


def _target_row(target: MacroTarget) -> dict[str, float]:
    return {
        "calories": target.calories,
        "protein": target.protein,
        "carbs": target.carbs,
        "fats": target.fats,
    }
