"""Unit tests for settings and the analysis configuration."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from worktime.config import AnalysisConfig, Settings, build_analysis_config
from worktime.core.exceptions import ConfigurationError, ParseError


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("THRESHOLD_MINUTES", raising=False)
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        settings = Settings(_env_file=None)

        assert settings.threshold_minutes == 240
        assert settings.padding_minutes == 5
        assert settings.cell_minutes == 30
        assert settings.github_enabled is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("THRESHOLD_MINUTES", "120")
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")

        settings = Settings(_env_file=None)

        assert settings.threshold_minutes == 120
        assert settings.github_enabled is True


class TestAnalysisConfig:
    """Tests for AnalysisConfig validation."""

    def test_defaults(self):
        config = AnalysisConfig()

        assert config.threshold == timedelta(minutes=240)
        assert config.padding == timedelta(minutes=5)
        assert config.cells_per_day == 48
        assert config.has_range is False

    def test_inverted_range_raises(self):
        with pytest.raises(ConfigurationError, match="before it starts"):
            AnalysisConfig(
                start=datetime(2022, 2, 1, tzinfo=UTC),
                end=datetime(2022, 1, 1, tzinfo=UTC),
            )

    def test_cell_size_must_divide_day(self):
        with pytest.raises(ConfigurationError):
            AnalysisConfig(cell_size=timedelta(minutes=7))

    def test_negative_padding_raises(self):
        with pytest.raises(ConfigurationError):
            AnalysisConfig(padding=timedelta(minutes=-1))

    def test_is_frozen(self):
        config = AnalysisConfig()
        with pytest.raises(AttributeError):
            config.threshold = timedelta(0)  # type: ignore[misc]


class TestBuildAnalysisConfig:
    """Tests for combining settings and CLI overrides."""

    def test_uses_settings(self):
        settings = Settings(_env_file=None, threshold_minutes=90)

        config = build_analysis_config(settings)

        assert config.threshold == timedelta(minutes=90)
        assert config.start == datetime(2021, 9, 1, tzinfo=UTC)
        assert config.end == datetime(2022, 9, 30, 23, 59, 59, tzinfo=UTC)

    def test_overrides_win(self):
        settings = Settings(_env_file=None)

        config = build_analysis_config(
            settings,
            start="2022-03-01T00:00:00Z",
            end="2022-04-01T00:00:00Z",
            threshold_minutes=0,
        )

        assert config.threshold == timedelta(0)
        assert config.start == datetime(2022, 3, 1, tzinfo=UTC)

    def test_bad_date_raises_parse_error(self):
        with pytest.raises(ParseError, match="--from"):
            build_analysis_config(Settings(_env_file=None), start="not a date")
