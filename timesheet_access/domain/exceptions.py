"""Domain-specific exceptions. Pure domain layer, no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidParameterError(DomainError):
    """Raised when a date, identifier or enumerated value is malformed."""


class InvalidTenantError(InvalidParameterError):
    """Raised when tenant_id is invalid (e.g. empty)."""


class InvalidPeriodError(InvalidParameterError):
    """Raised when a period-month cannot be normalised to the first day of a month."""
