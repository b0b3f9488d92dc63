"""Domain models for weigh-ins."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class WeightLog:
    """A bodyweight reading in pounds."""

    id: UUID
    user_id: str
    experience_id: str | None
    weight_lbs: float
    recorded_for: datetime
    note: str | None
