"""Tagged results of remote-facing operations."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    OK = "ok"
    STALE = "stale"  # write succeeded, follow-up list fetch failed
    VALIDATION_FAILED = "validation_failed"
    REMOTE_FAILED = "remote_failed"
    NOT_AUTHENTICATED = "not_authenticated"
    CANCELLED = "cancelled"


@dataclass
class SyncResult:
    """Outcome of a mutation plus the status line shown to the user."""
    outcome: Outcome
    status: str
    record_id: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        """True when the remote write went through (list may still be stale)."""
        return self.outcome in (Outcome.OK, Outcome.STALE)


@dataclass
class Segment:
    """A run of displayed text; match=True for a highlighted search hit."""
    text: str
    match: bool = False
