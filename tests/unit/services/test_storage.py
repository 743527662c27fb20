"""Unit tests for the activity store and record conversion."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from worktime.core.exceptions import ParseError
from worktime.services.github.types import CommitRecord, CommitStats, IssueEventRecord
from worktime.services.storage import ActivityStore, events_from_records
from worktime.services.timeline import PlainCommit, PullRequestCommit


def _commit(sha: str = "abc123", provenance=None) -> CommitRecord:
    return CommitRecord(
        sha=sha,
        author="adzialocha",
        date="2022-03-01T10:00:00Z",
        message="Add feature",
        provenance=provenance or PlainCommit(),
        stats=CommitStats(total=3, additions=2, deletions=1, files=1),
    )


def _issue(event_id: int = 1) -> IssueEventRecord:
    return IssueEventRecord(
        id=event_id,
        author="adzialocha",
        date="2022-03-01T11:00:00Z",
        event_type="closed",
        issue_id=4,
    )


class TestActivityStore:
    """Tests for reading and writing activity files."""

    def test_write_produces_documented_shape(self, tmp_path):
        store = ActivityStore(tmp_path / "data")

        path = store.write("aquadoggo", [_commit(provenance=PullRequestCommit(pr_id=9))], [_issue()])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert path.name == "aquadoggo.json"
        assert data["commits"] == [
            {
                "author": "adzialocha",
                "date": "2022-03-01T10:00:00Z",
                "message": "Add feature",
                "pullRequestId": 9,
                "sha": "abc123",
                "stats": {"total": 3, "additions": 2, "deletions": 1, "files": 1},
            }
        ]
        assert data["issues"] == [
            {
                "id": 1,
                "author": "adzialocha",
                "date": "2022-03-01T11:00:00Z",
                "eventType": "closed",
                "issueId": 4,
            }
        ]

    def test_plain_commit_has_no_pull_request(self, tmp_path):
        store = ActivityStore(tmp_path)
        path = store.write("repo", [_commit()], [])

        assert json.loads(path.read_text())["commits"][0]["pullRequestId"] is None

    def test_list_files_ignores_other_files(self, tmp_path):
        (tmp_path / "b.json").write_text("{}")
        (tmp_path / "a.json").write_text("{}")
        (tmp_path / "notes.txt").write_text("x")

        assert [p.name for p in ActivityStore(tmp_path).list_files()] == ["a.json", "b.json"]

    def test_missing_folder_has_no_files(self, tmp_path):
        assert ActivityStore(tmp_path / "missing").list_files() == []

    def test_load_events_reads_every_file(self, tmp_path):
        store = ActivityStore(tmp_path)
        store.write("one", [_commit("a")], [_issue(1)])
        store.write("two", [_commit("b")], [])

        collections = store.load_events()

        assert [len(c) for c in collections] == [2, 1]
        assert collections[0][0].kind == "commit"
        assert collections[0][1].kind == "issue"

    def test_file_without_issues_array(self, tmp_path):
        (tmp_path / "old.json").write_text(
            json.dumps({"commits": [{"sha": "a", "date": "2022-03-01T10:00:00Z"}]})
        )

        collections = ActivityStore(tmp_path).load_events()

        assert len(collections[0]) == 1

    def test_invalid_json_raises_parse_error(self, tmp_path):
        (tmp_path / "broken.json").write_text("{not json")

        with pytest.raises(ParseError, match="broken.json"):
            ActivityStore(tmp_path).load_events()

    def test_invalid_utf8_raises_parse_error(self, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"commits": [], "issues": [\xff]}')

        with pytest.raises(ParseError, match="Invalid UTF-8"):
            ActivityStore(tmp_path).read(path)

    def test_wrong_shape_raises_parse_error(self, tmp_path):
        (tmp_path / "list.json").write_text("[]")

        with pytest.raises(ParseError, match="Expected an object"):
            ActivityStore(tmp_path).load_events()


class TestEventsFromRecords:
    """Tests for converting stored records into events."""

    def test_converts_timestamps_and_provenance(self):
        events = events_from_records(
            [{"sha": "a", "date": "2022-03-01T10:00:00Z", "pullRequestId": 5}],
            [{"id": 1, "date": "2022-03-01T11:00:00Z", "eventType": "closed"}],
        )

        assert events[0].timestamp == datetime(2022, 3, 1, 10, tzinfo=UTC)
        assert events[0].provenance == PullRequestCommit(pr_id=5)
        assert events[1].provenance is None
        assert events[1].identity == "issue:1"

    def test_missing_date_aborts(self):
        with pytest.raises(ParseError, match=r"repo.json: commits\[1\]"):
            events_from_records(
                [{"sha": "a", "date": "2022-03-01T10:00:00Z"}, {"sha": "b"}],
                [],
                source="repo.json",
            )

    def test_malformed_issue_date_aborts(self):
        with pytest.raises(ParseError, match="Malformed"):
            events_from_records([], [{"id": 1, "date": "01/03/2022"}])

    def test_non_object_record_aborts(self):
        with pytest.raises(ParseError, match="Expected an object"):
            events_from_records(["abc"], [])  # type: ignore[list-item]
