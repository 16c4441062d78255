"""Governance-layer exceptions. Typed, no HTTP."""


class GovernanceError(Exception):
    """Base for all governance-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuditWriteFailed(GovernanceError):
    """The audit sink rejected a record. Reported on the ops channel; never blocks the action."""

    def __init__(self, message: str, record=None) -> None:
        super().__init__(message)
        self.record = record
