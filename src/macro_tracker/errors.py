"""Application error taxonomy mapped to HTTP responses in the API layer."""


class MacroTrackerError(Exception):
    """Base class for expected application errors."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class UnauthorizedError(MacroTrackerError):
    """Raised when the session token is missing or invalid."""

    default_message = "Unauthorized"


class NotFoundError(MacroTrackerError):
    """Raised when an entity is absent or not owned by the caller."""

    default_message = "Not found."


class ValidationError(MacroTrackerError):
    """Raised when input passes schema checks but is still unusable."""

    default_message = "Invalid request payload."

    def __init__(
        self, message: str | None = None, field: str | None = None
    ) -> None:
        super().__init__(message)
        self.field = field

    def details(self) -> dict[str, object]:
        """Return field-level detail for the response body."""
        if self.field is None:
            return {"form_errors": [self.message], "field_errors": {}}
        return {"form_errors": [], "field_errors": {self.field: [self.message]}}


class ConfigurationError(MacroTrackerError):
    """Raised when a required credential or connection setting is missing."""

    default_message = "Service is not configured."
