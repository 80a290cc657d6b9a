"""
Agenda Domain

Renders a day's appointments, grouped by staff member, as a calendar image
and delivers it to each organization's configured recipient.

Layout (pure, no I/O):
- time_utils.py  - HH:MM parsing/formatting and end-time derivation
- layout.py      - view window, overlap columns, pixel geometry
- styles.py      - status → colors/label table
- markup.py      - self-contained HTML for a resolved layout

Delivery:
- trigger.py     - per-organization send-hour check in local time
- repository.py  - configuration and appointment queries
- service.py     - the daily job: query → layout → image → upload → webhook
- router.py      - POST /agenda/preview
"""

from typing import Sequence, Union

from .layout import build_agenda_layout
from .markup import render_layout_html
from .schemas import MemberAppointments, OrganizationInfo


def render_agenda_html(
    organization: Union[OrganizationInfo, dict],
    members_with_appointments: Sequence[Union[MemberAppointments, dict]],
    date: str,
) -> str:
    """Build the layout for a day and return it as a renderable HTML document"""
    layout = build_agenda_layout(organization, members_with_appointments, date)
    return render_layout_html(layout)


__all__ = ["build_agenda_layout", "render_agenda_html", "render_layout_html"]
