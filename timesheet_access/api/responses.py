"""Status codes for structured denials returned by the application layer."""

from typing import Optional

_DENIAL_STATUS = {
    "invalid-parameter": 422,
    "justification-required": 422,
    "scope-resolution-failed": 503,
    "lock-resolution-failed": 503,
}


def status_for_denial(reason: Optional[str]) -> int:
    """403 unless the denial is a bad request or a store outage."""
    return _DENIAL_STATUS.get(reason or "", 403)
