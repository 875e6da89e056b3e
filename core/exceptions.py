"""
Centralized exception hierarchy for domain-specific errors.

Route handlers raise these and ``core.api.api_route`` maps them onto HTTP
status codes, so services never have to know about FastAPI.
"""


class JourneyLogError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(JourneyLogError):
    """Exception raised when data validation fails."""

    @property
    def errors(self) -> list[dict]:
        return self.details.get("errors", [])


class ResourceNotFoundError(JourneyLogError):
    """Exception raised when a requested resource is not found."""


class DatabaseError(JourneyLogError):
    """Exception raised when a store operation fails."""


JourneyLogException = JourneyLogError
ValidationException = ValidationError
ResourceNotFoundException = ResourceNotFoundError
DatabaseException = DatabaseError
