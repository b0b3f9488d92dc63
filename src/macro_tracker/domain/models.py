"""Domain models for users, targets and request scope."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroTarget:
    """Daily macro goals for a user."""

    calories: float
    protein: float
    carbs: float
    fats: float


DEFAULT_MACRO_TARGET = MacroTarget(calories=2300, protein=185, carbs=210, fats=55)


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: str
    email: str | None
    display_name: str | None


@dataclass(frozen=True)
class OwnerScope:
    """User and tenant that every tenant-scoped read or write is filtered by.

    ``experience_id`` is ``None`` for users outside any experience, and
    ``None`` only matches ``None``.
    """

    user_id: str
    experience_id: str | None

    def owns(self, user_id: str, experience_id: str | None) -> bool:
        """Return true when an entity with these owner fields is visible."""
        return self.user_id == user_id and self.experience_id == experience_id


def normalize_experience_id(value: str | None) -> str | None:
    """Map a missing or blank experience header to ``None``."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


@dataclass(frozen=True)
class Session:
    """An authenticated request context."""

    user: UserRecord
    macro_target: MacroTarget
    experience_id: str | None

    @property
    def scope(self) -> OwnerScope:
        return OwnerScope(user_id=self.user.id, experience_id=self.experience_id)
