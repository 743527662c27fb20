"""Configuration package."""

from worktime.config.analysis import AnalysisConfig, build_analysis_config
from worktime.config.settings import Settings, settings

__all__ = [
    "AnalysisConfig",
    "build_analysis_config",
    "Settings",
    "settings",
]
