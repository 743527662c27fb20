"""Unit tests for a whole analysis run."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

from tests.helpers.factories import at, make_commit_event, make_issue_event
from worktime.config.analysis import AnalysisConfig
from worktime.services.analysis import run_analysis
from worktime.services.timeline import WorkPhase


class TestRunAnalysis:
    """Tests for run_analysis()."""

    def test_scenario_from_two_sources(self):
        config = AnalysisConfig(
            threshold=timedelta(minutes=120),
            start=datetime(2022, 3, 1, tzinfo=UTC),
            end=datetime(2022, 3, 3, tzinfo=UTC),
        )
        commits = [make_commit_event(at("09:00"), "a"), make_commit_event(at("13:00"), "b")]
        issues = [make_issue_event(at("09:30"), 1)]

        result = run_analysis([commits, issues], config)

        assert [e.timestamp for e in result.timeline] == [at("09:00"), at("09:30"), at("13:00")]
        assert result.phases == (
            WorkPhase(at("09:00"), at("09:35")),
            WorkPhase(at("13:00"), at("13:05")),
        )
        assert [d.day for d in result.days] == [date(2022, 3, 1), date(2022, 3, 2)]
        assert result.days[0].minutes == 40.0
        assert result.days[1].minutes == 0.0
        assert result.total_minutes == 40.0
        assert result.months[0].minutes == 40.0

    def test_no_events(self, march_config):
        result = run_analysis([], march_config)

        assert result.timeline == ()
        assert result.phases == ()
        assert result.total_minutes == 0.0
        assert len(result.days) == 31
        assert all(not cell.in_phase for day in result.days for cell in day.cells)

    def test_events_outside_range_do_not_count(self, march_config):
        late = [make_commit_event(datetime(2022, 5, 1, 9, tzinfo=UTC))]

        result = run_analysis([late], march_config)

        assert len(result.phases) == 1
        assert result.total_minutes == 0.0
