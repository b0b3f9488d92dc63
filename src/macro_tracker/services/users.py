"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol

from macro_tracker.adapters.whop_client import WhopClient
from macro_tracker.domain.models import DEFAULT_MACRO_TARGET, MacroTarget, UserRecord

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for users and their macro targets."""

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user for a platform user id, if present."""

    def create_user(
        self, user_id: str, email: str | None, display_name: str | None
    ) -> UserRecord:
        """Create and return a new user record."""

    def get_macro_target(self, user_id: str) -> MacroTarget | None:
        """Return the user's macro target, if one exists."""

    def create_macro_target(self, user_id: str, target: MacroTarget) -> MacroTarget:
        """Create the macro target row for a user."""

    def update_macro_target(self, user_id: str, target: MacroTarget) -> MacroTarget:
        """Replace the macro target values for a user."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    whop_client: WhopClient

    async def ensure_user(self, user_id: str) -> tuple[UserRecord, MacroTarget]:
        """Ensure a user and macro target exist for the platform id."""
        existing = self.repository.get_user(user_id)
        if existing is None:
            email, display_name = await self._fetch_profile(user_id)
            existing = self.repository.create_user(user_id, email, display_name)
        target = self.repository.get_macro_target(user_id)
        if target is None:
            target = self.repository.create_macro_target(user_id, DEFAULT_MACRO_TARGET)
        return existing, target

    def update_macro_target(self, user_id: str, target: MacroTarget) -> MacroTarget:
        """Store new daily targets for a user."""
        if self.repository.get_macro_target(user_id) is None:
            return self.repository.create_macro_target(user_id, target)
        return self.repository.update_macro_target(user_id, target)

    async def _fetch_profile(self, user_id: str) -> tuple[str | None, str | None]:
        """Best-effort profile lookup; failures never block sign-in."""
        try:
            profile = await self.whop_client.retrieve_user(user_id)
        except Exception:
            _logger.warning(
                "Failed to retrieve Whop profile", exc_info=True, extra={"user_id": user_id}
            )
            return None, None
        email = profile.get("email")
        display_name = profile.get("name") or profile.get("display_name") or profile.get(
            "username"
        )
        return (
            email if isinstance(email, str) else None,
            display_name if isinstance(display_name, str) else None,
        )
