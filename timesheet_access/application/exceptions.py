"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StoreUnavailableError(ApplicationError):
    """A backing store failed while a decision was being made. Nothing was allowed."""

    code = "store-unavailable"
