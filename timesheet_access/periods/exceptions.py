"""Period-lock exceptions. Typed, no HTTP."""


class PeriodError(Exception):
    """Base for all period-lock errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class LockResolutionFailed(PeriodError):
    """
    Raised when the effective lock cannot be computed (store error or a record from
    another tenant). Distinct from "no record found", which resolves to unlocked.
    """
