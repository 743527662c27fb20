"""
Activity store: one JSON file of commit and issue records per repository.

The fetch command writes the files, the analyse command reads them back and
turns every record into a timeline Event.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from worktime.core.exceptions import ParseError
from worktime.core.timeutils import parse_instant
from worktime.services.github.types import CommitRecord, IssueEventRecord
from worktime.services.timeline.types import (
    Event,
    EventProvenance,
    PlainCommit,
    PullRequestCommit,
)

logger = logging.getLogger(__name__)


def commit_to_record(commit: CommitRecord) -> dict[str, Any]:
    """Serialize a commit to its stored JSON shape."""
    return {
        "author": commit.author,
        "date": commit.date,
        "message": commit.message,
        "pullRequestId": commit.pull_request_id,
        "sha": commit.sha,
        "stats": asdict(commit.stats) if commit.stats else None,
    }


def issue_event_to_record(event: IssueEventRecord) -> dict[str, Any]:
    """Serialize an issue event to its stored JSON shape."""
    return {
        "id": event.id,
        "author": event.author,
        "date": event.date,
        "eventType": event.event_type,
        "issueId": event.issue_id,
    }


def _provenance_from_record(record: dict[str, Any]) -> EventProvenance:
    pr_id = record.get("pullRequestId")
    if pr_id:
        return PullRequestCommit(pr_id=int(pr_id))
    return PlainCommit()


def _check_record(record: object, where: str) -> None:
    if not isinstance(record, dict):
        raise ParseError(f"Expected an object, got {type(record).__name__}", where)


def events_from_records(
    commits: list[dict[str, Any]],
    issues: list[dict[str, Any]],
    source: str | None = None,
) -> list[Event]:
    """
    Convert stored records into events, commits first then issue events.

    Args:
        commits: Stored commit records
        issues: Stored issue event records
        source: Name of the file the records came from, for error messages

    Returns:
        Events in record order

    Raises:
        ParseError: If a record has a missing or malformed "date"
    """
    events: list[Event] = []

    for index, record in enumerate(commits):
        where = f"{source or 'records'}: commits[{index}]"
        _check_record(record, where)
        timestamp = parse_instant(record.get("date"), where)
        events.append(
            Event(
                kind="commit",
                timestamp=timestamp,
                payload=record,
                provenance=_provenance_from_record(record),
            )
        )

    for index, record in enumerate(issues):
        where = f"{source or 'records'}: issues[{index}]"
        _check_record(record, where)
        timestamp = parse_instant(record.get("date"), where)
        events.append(Event(kind="issue", timestamp=timestamp, payload=record))

    return events


class ActivityStore:
    """Reads and writes per-repository activity files in a data folder."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def path_for(self, repo: str) -> Path:
        return self.data_dir / f"{repo}.json"

    def write(
        self,
        repo: str,
        commits: list[CommitRecord],
        issues: list[IssueEventRecord],
    ) -> Path:
        """
        Write the activity of one repository, replacing any earlier file.

        Returns:
            Path of the written file
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(repo)
        data = {
            "commits": [commit_to_record(c) for c in commits],
            "issues": [issue_event_to_record(e) for e in issues],
        }
        path.write_text(json.dumps(data), encoding="utf-8")
        logger.info(f"Wrote {len(commits)} commits and {len(issues)} issue events to {path}")
        return path

    def list_files(self) -> list[Path]:
        """List stored activity files, sorted by name."""
        if not self.data_dir.is_dir():
            return []
        return sorted(self.data_dir.glob("*.json"))

    def read(self, path: Path) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        """
        Read one activity file.

        Files written before issue events were collected have no "issues"
        array and are read as having none.

        Returns:
            Tuple of (commit records, issue event records)

        Raises:
            ParseError: If the file is not valid JSON or has the wrong shape
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e.msg}", str(path)) from e
        except (ValueError, UnicodeDecodeError) as e:
            raise ParseError(f"Invalid UTF-8 text: {e}", str(path)) from e
        except OSError as e:
            raise ParseError(f"Cannot read file: {e.strerror}", str(path)) from e

        if not isinstance(data, dict):
            raise ParseError("Expected an object with 'commits' and 'issues'", str(path))

        commits = data.get("commits", [])
        issues = data.get("issues", [])
        if not isinstance(commits, list) or not isinstance(issues, list):
            raise ParseError("'commits' and 'issues' must be arrays", str(path))

        return commits, issues

    def load_events(self) -> list[list[Event]]:
        """
        Load every stored file as one event collection per repository.

        Raises:
            ParseError: On the first unreadable file or malformed timestamp
        """
        collections: list[list[Event]] = []
        for path in self.list_files():
            commits, issues = self.read(path)
            events = events_from_records(commits, issues, source=path.name)
            logger.info(f"Read {len(events)} events from {path.name}")
            collections.append(events)
        return collections
