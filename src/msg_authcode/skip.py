"""
Skip-profile setting.

The Graph /me call can be skipped when the application only needs the tokens.
The variant is chosen when the config is built, so the strategy never has to
guess whether a predicate is sync or async.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional


class SkipKind(str, Enum):
    NEVER = "never"
    ALWAYS = "always"
    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True)
class SkipProfile:
    kind: SkipKind = SkipKind.NEVER
    predicate: Optional[Callable] = None

    @classmethod
    def never(cls) -> "SkipProfile":
        """Always fetch the profile."""
        return cls(SkipKind.NEVER)

    @classmethod
    def always(cls) -> "SkipProfile":
        """Never fetch the profile; verify receives None."""
        return cls(SkipKind.ALWAYS)

    @classmethod
    def sync(cls, predicate: Callable[[], bool]) -> "SkipProfile":
        """Skip when predicate() is truthy. Called once per attempt."""
        return cls(SkipKind.SYNC, predicate)

    @classmethod
    def async_(cls, predicate: Callable[[str], Awaitable[bool]]) -> "SkipProfile":
        """Skip when `await predicate(access_token)` is truthy."""
        return cls(SkipKind.ASYNC, predicate)

    @classmethod
    def from_bool(cls, skip: bool) -> "SkipProfile":
        """Map a plain boolean setting to always/never."""
        return cls.always() if skip else cls.never()

    def __post_init__(self):
        """Predicate variants must carry a callable."""
        if self.kind in (SkipKind.SYNC, SkipKind.ASYNC) and not callable(self.predicate):
            raise TypeError(f"skip_user_profile={self.kind.value} requires a callable predicate")

    async def should_skip(self, access_token: str) -> bool:
        """Evaluate the setting for one attempt."""
        if self.kind is SkipKind.ALWAYS:
            return True
        if self.kind is SkipKind.SYNC:
            return bool(self.predicate())
        if self.kind is SkipKind.ASYNC:
            return bool(await self.predicate(access_token))
        return False
