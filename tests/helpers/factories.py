"""Test data factories for events and raw GitHub API payloads."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from worktime.services.timeline.types import Event, EventProvenance, PlainCommit

DAY = date(2022, 3, 1)


def at(hhmm: str, day: date = DAY) -> datetime:
    """Build an aware UTC datetime from "HH:MM" on the given day."""
    hours, minutes = (int(part) for part in hhmm.split(":"))
    return datetime(day.year, day.month, day.day, hours, minutes, tzinfo=UTC)


def make_commit_event(
    timestamp: datetime,
    sha: str | None = None,
    provenance: EventProvenance | None = None,
    **payload: Any,
) -> Event:
    """Build a commit event; the sha defaults to one derived from the timestamp."""
    return Event(
        kind="commit",
        timestamp=timestamp,
        payload={"sha": sha or f"sha-{timestamp.isoformat()}", **payload},
        provenance=provenance or PlainCommit(),
    )


def make_issue_event(timestamp: datetime, event_id: int, **payload: Any) -> Event:
    return Event(kind="issue", timestamp=timestamp, payload={"id": event_id, **payload})


def commit_json(
    sha: str,
    message: str = "Fix things",
    date: str = "2022-03-01T10:00:00Z",
    login: str | None = "adzialocha",
    name: str = "adz",
) -> dict[str, Any]:
    """Minimal GitHub commit API payload."""
    return {
        "sha": sha,
        "author": {"login": login} if login else None,
        "commit": {
            "message": message,
            "author": {"name": name, "date": date},
        },
    }


def issue_event_json(
    event_id: int,
    event: str = "closed",
    created_at: str = "2022-03-01T10:00:00Z",
    login: str = "adzialocha",
    number: int = 1,
) -> dict[str, Any]:
    """Minimal GitHub issue event API payload."""
    return {
        "id": event_id,
        "event": event,
        "created_at": created_at,
        "actor": {"login": login},
        "issue": {"number": number},
    }
