"""Resolve platform user tokens into local sessions."""

import logging
from dataclasses import dataclass

from macro_tracker.adapters.whop_client import WhopClient
from macro_tracker.domain.models import Session, normalize_experience_id
from macro_tracker.errors import ConfigurationError, UnauthorizedError
from macro_tracker.services.users import UserService

_logger = logging.getLogger(__name__)


@dataclass
class SessionService:
    """Validates tokens with Whop and maps them to local users."""

    whop_client: WhopClient
    user_service: UserService

    async def require_session(
        self, token: str | None, experience_id: str | None = None
    ) -> Session:
        """Return the session for a token or raise ``UnauthorizedError``."""
        if not token:
            raise UnauthorizedError("Missing Whop user token header.")
        whop_user_id = await self.whop_client.verify_user_token(token)
        if not whop_user_id:
            raise UnauthorizedError("Invalid Whop user token.")
        user, target = await self.user_service.ensure_user(whop_user_id)
        return Session(
            user=user,
            macro_target=target,
            experience_id=normalize_experience_id(experience_id),
        )

    async def optional_session(
        self, token: str | None, experience_id: str | None = None
    ) -> Session | None:
        """Return a session, or ``None`` when signed out or misconfigured."""
        try:
            return await self.require_session(token, experience_id)
        except UnauthorizedError:
            return None
        except ConfigurationError as exc:
            _logger.warning("Session unavailable, rendering guest view: %s", exc)
            return None
