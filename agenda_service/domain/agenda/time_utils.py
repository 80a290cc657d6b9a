"""Time-of-day helpers shared by the layout engine and the trigger predicate"""

from typing import Optional

MINUTES_PER_DAY = 24 * 60
DEFAULT_APPOINTMENT_MINUTES = 30


def time_to_minutes(time_string: str) -> int:
    """
    Convert "HH:MM" (seconds, if present, are ignored) to minutes since midnight.

    Raises:
        ValueError: If the value is not a well-formed time of day
    """
    parts = str(time_string).strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time value: {time_string!r}")

    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time value: {time_string!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as zero-padded "HH:MM", wrapping past midnight"""
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def derive_end_minutes(
    start_time: str,
    end_time: Optional[str] = None,
    duration_minutes: Optional[int] = None,
) -> int:
    """
    Resolve an appointment's end in minutes since midnight.

    Precedence: explicit end time, then start + service duration,
    then start + 30 minutes. An explicit end that is not after the start
    is ignored and the next rule applies.
    """
    start = time_to_minutes(start_time)

    if end_time:
        end = time_to_minutes(end_time)
        if end > start:
            return end

    if duration_minutes and duration_minutes > 0:
        return start + duration_minutes

    return start + DEFAULT_APPOINTMENT_MINUTES
