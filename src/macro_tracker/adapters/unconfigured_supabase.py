"""Placeholder Supabase client for deployments without database settings."""

from dataclasses import dataclass

from macro_tracker.errors import ConfigurationError


@dataclass
class UnconfiguredSupabaseClient:
    """Raises ``ConfigurationError`` as soon as any table is queried."""

    missing: list[str]

    def table(self, name: str) -> object:
        raise ConfigurationError(
            f"Missing {', '.join(self.missing)} environment variable(s); "
            f"cannot query {name}."
        )
