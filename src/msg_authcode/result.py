"""Outcome of a single authentication attempt."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Outcome(str, Enum):
    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


@dataclass(frozen=True)
class AuthResult:
    """
    Exactly one of success/fail/error per attempt.

    SUCCESS carries the user (and optional info), FAIL carries optional info
    (a diagnostic or the exception that ended the attempt), ERROR carries the
    exception raised by the verify function.
    """

    outcome: Outcome
    user: Any = None
    info: Any = None
    error: Exception | None = None

    @classmethod
    def succeeded(cls, user, info=None) -> "AuthResult":
        """Authenticated user, with optional info."""
        return cls(Outcome.SUCCESS, user=user, info=info)

    @classmethod
    def failed(cls, info=None) -> "AuthResult":
        """Authentication failed; info is a diagnostic or the exception that ended the attempt."""
        return cls(Outcome.FAIL, info=info)

    @classmethod
    def errored(cls, error: Exception) -> "AuthResult":
        """The verify callback raised."""
        return cls(Outcome.ERROR, error=error)

    @property
    def ok(self) -> bool:
        """True only for SUCCESS."""
        return self.outcome is Outcome.SUCCESS
