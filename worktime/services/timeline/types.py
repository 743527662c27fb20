"""Data types for the activity timeline and inferred work phases."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Any, Literal

from worktime.core.exceptions import InvalidIntervalError

EventKind = Literal["commit", "issue"]


@dataclass(frozen=True)
class PlainCommit:
    """Commit pushed directly to a branch."""


@dataclass(frozen=True)
class SquashMergeCommit:
    """Commit created by squash-merging a pull request."""

    pr_id: int


@dataclass(frozen=True)
class PullRequestCommit:
    """Commit taken from a pull request's own commit list."""

    pr_id: int


EventProvenance = PlainCommit | SquashMergeCommit | PullRequestCommit


@dataclass(frozen=True)
class Event:
    """Single timestamped activity, read-only once created."""

    kind: EventKind
    timestamp: datetime  # Aware UTC instant
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False)
    provenance: EventProvenance | None = None  # Commits only

    def __post_init__(self) -> None:
        if not isinstance(self.payload, MappingProxyType):
            object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    @property
    def identity(self) -> str | None:
        """
        Stable identity used for deduplication.

        "commit:{sha}" for commits and "issue:{id}" for issue events. Records
        without a sha or id have no identity and are never deduplicated.
        """
        if self.kind == "commit" and self.payload.get("sha"):
            return f"commit:{self.payload['sha']}"
        if self.kind == "issue" and self.payload.get("id") is not None:
            return f"issue:{self.payload['id']}"

        return None


Timeline = tuple[Event, ...]


def _check_bounds(start: datetime, end: datetime) -> None:
    if end < start:
        raise InvalidIntervalError(start, end)


@dataclass(frozen=True)
class WorkPhase:
    """Inferred continuous working session."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        _check_bounds(self.start, self.end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class QueryInterval:
    """Half-open [start, end) window to measure work in."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        _check_bounds(self.start, self.end)

    def contains(self, instant: datetime) -> bool:
        """Check if an instant lies inside the window (end excluded)."""
        return self.start <= instant < self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start
