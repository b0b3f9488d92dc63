"""Whop platform API client."""

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Protocol

import httpx
import jwt

from macro_tracker.errors import ConfigurationError

_logger = logging.getLogger(__name__)

# Public key Whop signs ``x-whop-user-token`` JWTs with (ES256, P-256).
WHOP_TOKEN_JWK = (
    '{"kty":"EC","crv":"P-256",'
    '"x":"rz8a8vxvexHC0TLT91g7llOdDOsNuYiGEfic4Qhni-E",'
    '"y":"zH0QblKYToexd5PEIMGXPVJS9AB5smKrW4S_TbiXrOs"}'
)
WHOP_TOKEN_ISSUER = "urn:whopcom:exp-proxy"


class WhopClient(Protocol):
    """Interface for Whop API interactions."""

    async def verify_user_token(self, token: str) -> str | None:
        """Return the Whop user id for a valid token, else ``None``."""

    async def retrieve_user(self, user_id: str) -> dict[str, object]:
        """Fetch a user's public profile."""

    async def close(self) -> None:
        """Release any held connections."""


@dataclass
class HttpxWhopClient(WhopClient):
    """Verifies user tokens locally and calls the Whop REST API with httpx."""

    api_key: str
    app_id: str
    base_url: str
    http_client: httpx.AsyncClient
    token_jwk: str = WHOP_TOKEN_JWK

    @classmethod
    def create(
        cls, api_key: str, app_id: str, base_url: str, token_jwk: str | None = None
    ) -> "HttpxWhopClient":
        """Create a Whop client with a managed httpx session."""
        return cls(
            api_key=api_key,
            app_id=app_id,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            token_jwk=token_jwk or WHOP_TOKEN_JWK,
        )

    @cached_property
    def _verification_key(self):  # type: ignore[no-untyped-def]
        return jwt.PyJWK.from_json(self.token_jwk).key

    async def verify_user_token(self, token: str) -> str | None:
        """Check the token signature, issuer and audience; return its subject.

        A malformed verification key raises instead of rejecting the token.
        """
        key = self._verification_key
        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=["ES256"],
                audience=self.app_id,
                issuer=WHOP_TOKEN_ISSUER,
            )
        except jwt.InvalidTokenError as exc:
            _logger.info("Rejected Whop user token: %s", exc)
            return None
        user_id = claims.get("sub")
        return str(user_id) if user_id else None

    async def retrieve_user(self, user_id: str) -> dict[str, object]:
        """Fetch a user's profile by id."""
        url = f"{self.base_url}/users/{user_id}"
        response = await self.http_client.get(url, headers=self._headers(), timeout=10)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}


@dataclass
class UnconfiguredWhopClient(WhopClient):
    """Stand-in used when Whop credentials are missing."""

    missing: list[str]

    async def verify_user_token(self, token: str) -> str | None:
        raise ConfigurationError(_missing_message(self.missing))

    async def retrieve_user(self, user_id: str) -> dict[str, object]:
        raise ConfigurationError(_missing_message(self.missing))

    async def close(self) -> None:
        return None


def _missing_message(missing: list[str]) -> str:
    return f"Missing {', '.join(missing)} environment variable(s)."
