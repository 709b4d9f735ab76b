"""Last-commit timestamps rendered as "time ago" text."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta

_WEAK_RFC3339_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})?"
)

# (seconds per unit, singular, plural); months/years use average lengths.
_UNITS: tuple[tuple[int, str, str], ...] = (
    (31_557_600, "year", "years"),
    (2_630_016, "month", "months"),
    (86_400, "day", "days"),
    (3_600, "h", "h"),
    (60, "m", "m"),
    (1, "s", "s"),
)


class DateError(Exception):
    pass


class ComputationError(DateError):
    """The timestamp lies after `now`, so no age can be computed."""


class FormattingError(DateError):
    """The timestamp is not a recognizable RFC 3339 date-time."""


def parse_timestamp(value: str) -> datetime:
    """Parse a weak RFC 3339 timestamp; naive values are taken as UTC."""

    text = value.strip()
    if not _WEAK_RFC3339_RE.fullmatch(text):
        raise FormattingError(f"invalid timestamp: {value!r}")
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text.replace("t", "T"))
    except ValueError as e:
        raise FormattingError(f"invalid timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def ago(date: str, *, now: datetime | None = None) -> timedelta:
    then = parse_timestamp(date)
    current = now if now is not None else datetime.now(tz=UTC)
    delta = current - then
    if delta < timedelta(0):
        raise ComputationError(f"timestamp is in the future: {date!r}")
    return delta


def format_duration_head(delta: timedelta) -> str:
    """Largest non-zero unit of a duration, e.g. `3days` or `4h`."""

    seconds = int(delta.total_seconds())
    for size, singular, plural in _UNITS:
        if seconds >= size:
            n = seconds // size
            return f"{n}{singular if n == 1 else plural}"

    ms = delta.microseconds // 1_000
    return f"{ms}ms" if ms else "0s"


def format_ago(date: str, *, now: datetime | None = None) -> str:
    try:
        return f"{format_duration_head(ago(date, now=now))} ago"
    except ComputationError:
        return "computation error"
    except FormattingError:
        return "formatting error"
