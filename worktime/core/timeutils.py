"""Instant parsing shared by the store, config and CLI."""

from datetime import UTC, datetime

from worktime.core.exceptions import ParseError


def parse_instant(value: object, source: str | None = None) -> datetime:
    """
    Parse an ISO 8601 string into an aware UTC datetime.

    Strings without an offset are interpreted as UTC, matching what the
    GitHub API and the CLI defaults produce.

    Args:
        value: Raw value taken from a record or an option
        source: Optional description of where the value came from, for errors

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ParseError: If the value is missing, not a string, or not ISO 8601
    """
    if value is None or value == "":
        raise ParseError("Missing timestamp", source)
    if not isinstance(value, str):
        raise ParseError(f"Timestamp must be a string, got {type(value).__name__}", source)

    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise ParseError(f"Malformed timestamp {value!r}", source) from e

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
