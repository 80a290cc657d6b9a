"""
Daily schedule layout

Turns appointments grouped by member into a fully resolved AgendaLayout:
the hour-aligned view window, a display column per appointment so that
overlapping appointments of one member sit side by side, and pixel
geometry inside the member's track.
"""

import math
from typing import Iterable, Sequence, Union

from .schemas import (
    AgendaLayout,
    AppointmentInput,
    MemberAppointments,
    MemberLane,
    OrganizationInfo,
    PlacedAppointment,
    ScheduleWindow,
)
from .styles import normalize_status
from .time_utils import MINUTES_PER_DAY, derive_end_minutes, minutes_to_time, time_to_minutes

DEFAULT_DAY_START = 8 * 60
DEFAULT_DAY_END = 18 * 60
WINDOW_PADDING_MINUTES = 60

# Pixel height of one 30-minute slot
SLOT_HEIGHT = 60
SLOT_MINUTES = 30

Interval = tuple[int, int]


def compute_view_window(intervals: Iterable[Interval]) -> ScheduleWindow:
    """
    Hour-aligned window covering every interval with an hour of margin on
    each side, clamped to the day. An empty day gets 08:00-18:00.
    """
    earliest = MINUTES_PER_DAY
    latest = 0
    seen = False

    for start, end in intervals:
        seen = True
        earliest = min(earliest, start)
        latest = max(latest, end)

    if not seen:
        earliest, latest = DEFAULT_DAY_START, DEFAULT_DAY_END
    else:
        earliest = max(0, earliest - WINDOW_PADDING_MINUTES)
        latest = min(MINUTES_PER_DAY, latest + WINDOW_PADDING_MINUTES)

    return ScheduleWindow(start_hour=earliest // 60, end_hour=math.ceil(latest / 60))


def intervals_overlap(a: Interval, b: Interval) -> bool:
    """Half-open test: touching intervals do not overlap"""
    return a[0] < b[1] and b[0] < a[1]


def assign_columns(intervals: Sequence[Interval]) -> tuple[list[int], int]:
    """
    Greedy interval partitioning.

    Intervals are visited by start time (ties keep input order) and each
    takes the lowest column with no overlapping interval already in it.

    Returns:
        (column for each interval in input order, number of columns used)
    """
    order = sorted(range(len(intervals)), key=lambda i: intervals[i][0])
    columns_by_index: dict[int, int] = {}
    placed_by_column: list[list[Interval]] = []

    for index in order:
        interval = intervals[index]
        column = 0
        while column < len(placed_by_column) and any(
            intervals_overlap(interval, other) for other in placed_by_column[column]
        ):
            column += 1

        if column == len(placed_by_column):
            placed_by_column.append([])
        placed_by_column[column].append(interval)
        columns_by_index[index] = column

    columns = [columns_by_index[i] for i in range(len(intervals))]
    return columns, max(len(placed_by_column), 1)


def track_height_for(window: ScheduleWindow) -> int:
    return (window.end_hour - window.start_hour) * (60 // SLOT_MINUTES) * SLOT_HEIGHT


def place_vertically(
    start_minutes: int, end_minutes: int, window: ScheduleWindow, track_height: int
) -> tuple[float, float]:
    """Return (top, height) in pixels proportional to the window"""
    total = window.total_minutes
    top = ((start_minutes - window.start_minutes) / total) * track_height
    height = ((end_minutes - start_minutes) / total) * track_height
    return top, height


def _resolve(appointment: AppointmentInput) -> PlacedAppointment:
    start = time_to_minutes(appointment.startTime)
    end = derive_end_minutes(
        appointment.startTime, appointment.endTime, appointment.serviceDurationMinutes
    )
    return PlacedAppointment(
        start_time=minutes_to_time(start),
        end_time=minutes_to_time(end),
        start_minutes=start,
        end_minutes=end,
        client=appointment.clientName,
        service=appointment.serviceName,
        status=normalize_status(appointment.status).value,
        column=0,
    )


def build_agenda_layout(
    organization: Union[OrganizationInfo, dict],
    members_with_appointments: Sequence[Union[MemberAppointments, dict]],
    date: str,
) -> AgendaLayout:
    """Resolve times, window, columns and geometry for a day's agenda"""
    organization = OrganizationInfo.model_validate(organization)
    groups = [MemberAppointments.model_validate(group) for group in members_with_appointments]

    resolved = [[_resolve(apt) for apt in group.appointments] for group in groups]

    window = compute_view_window(
        (apt.start_minutes, apt.end_minutes) for member in resolved for apt in member
    )
    track_height = track_height_for(window)

    lanes = []
    for group, appointments in zip(groups, resolved):
        # Chronological lane order; sorted() keeps input order for equal starts
        appointments = sorted(appointments, key=lambda apt: apt.start_minutes)
        columns, max_columns = assign_columns(
            [(apt.start_minutes, apt.end_minutes) for apt in appointments]
        )

        placed = []
        for apt, column in zip(appointments, columns):
            top, height = place_vertically(apt.start_minutes, apt.end_minutes, window, track_height)
            placed.append(
                apt.model_copy(
                    update={"column": column, "max_columns": max_columns, "top": top, "height": height}
                )
            )

        lanes.append(
            MemberLane(
                id=group.member.id,
                name=group.member.display_name,
                appointments=placed,
                max_columns=max_columns,
            )
        )

    return AgendaLayout(
        organization=organization,
        date=date,
        window=window,
        track_height=track_height,
        slot_height=SLOT_HEIGHT,
        members=lanes,
    )
