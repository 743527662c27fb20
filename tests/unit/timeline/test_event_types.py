"""Unit tests for event values and provenance."""

from __future__ import annotations

import dataclasses

import pytest

from tests.helpers.factories import at
from worktime.services.timeline import (
    Event,
    PlainCommit,
    PullRequestCommit,
    SquashMergeCommit,
)


class TestEvent:
    """Tests for the Event value type."""

    def test_is_frozen(self):
        event = Event(kind="commit", timestamp=at("09:00"), payload={"sha": "abc"})
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.timestamp = at("10:00")  # type: ignore[misc]

    def test_payload_is_read_only_copy(self):
        source = {"sha": "abc"}
        event = Event(kind="commit", timestamp=at("09:00"), payload=source)

        source["sha"] = "changed"
        with pytest.raises(TypeError):
            event.payload["sha"] = "xyz"  # type: ignore[index]
        assert event.payload["sha"] == "abc"

    def test_commit_identity_uses_sha(self):
        event = Event(kind="commit", timestamp=at("09:00"), payload={"sha": "abc"})
        assert event.identity == "commit:abc"

    def test_issue_identity_uses_id(self):
        event = Event(kind="issue", timestamp=at("09:00"), payload={"id": 42})
        assert event.identity == "issue:42"

    def test_record_without_id_has_no_identity(self):
        event = Event(kind="issue", timestamp=at("09:00"), payload={"eventType": "labeled"})
        assert event.identity is None


class TestProvenance:
    """Tests for the provenance variants."""

    def test_variants_compare_by_value(self):
        assert PullRequestCommit(pr_id=3) == PullRequestCommit(pr_id=3)
        assert PullRequestCommit(pr_id=3) != SquashMergeCommit(pr_id=3)
        assert PlainCommit() == PlainCommit()

    def test_attached_at_construction(self):
        event = Event(
            kind="commit",
            timestamp=at("09:00"),
            payload={"sha": "abc"},
            provenance=PullRequestCommit(pr_id=12),
        )
        assert event.provenance == PullRequestCommit(pr_id=12)
