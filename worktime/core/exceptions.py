class WorktimeError(Exception):
    """Base class for all worktime errors."""


class ParseError(WorktimeError):
    """Raised when an activity record cannot be turned into an event."""

    def __init__(self, message: str, source: str | None = None):
        self.message = message
        self.source = source  # File or record the bad value came from
        if source:
            message = f"{message} (in {source})"
        super().__init__(message)


class InvalidIntervalError(WorktimeError, ValueError):
    """Raised when an interval ends before it starts."""

    def __init__(self, start: object, end: object):
        self.start = start
        self.end = end
        super().__init__(f"Interval end {end} is before its start {start}")


class ConfigurationError(WorktimeError):
    """Raised when required configuration is missing or inconsistent."""
