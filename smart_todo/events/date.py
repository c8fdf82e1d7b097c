"""Date event: met once a given date has passed."""

from datetime import datetime

from ..errors import InvalidDateFormatError
from .base import ConditionResult
from .context import EventContext
from .registry import EventRegistry


def parse_date(value: str) -> datetime:
    """Parse an ISO-8601 date or date-time.

    Accepts "2024-05-01", "2024-05-01 13:00" and offsets such as
    "2024-05-01T13:00:00+02:00" or a trailing "Z".

    Raises:
        InvalidDateFormatError: If value isn't an ISO-8601 string
    """
    if not isinstance(value, str):
        raise InvalidDateFormatError(f"Expected an ISO-8601 date string, got {value!r}")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidDateFormatError(f"Invalid date {value!r}: {e}") from e


@EventRegistry.register("date")
def date(context: EventContext, date_string: str) -> ConditionResult:
    """Check if ``date_string`` is now or in the past.

    Naive dates are local time. A date equal to now counts as passed.
    """
    due = parse_date(date_string)
    now = context.now()

    if due.tzinfo is not None and now.tzinfo is None:
        now = now.astimezone()
    elif due.tzinfo is None and now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)

    if due <= now:
        return ConditionResult.met_with(f"The date {date_string} has passed.")
    return ConditionResult.not_met()
