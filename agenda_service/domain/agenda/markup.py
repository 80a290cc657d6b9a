"""HTML emission for a resolved AgendaLayout"""

from datetime import date as date_type

from ...utils.sanitization import sanitize_string
from .layout import SLOT_MINUTES
from .schemas import AgendaLayout, MemberLane, PlacedAppointment
from .styles import STATUS_STYLES
from .time_utils import minutes_to_time

TIME_COLUMN_WIDTH = 100


def format_agenda_date(value: str) -> str:
    """'2025-03-07' -> 'Friday, March 7, 2025' (locale independent)"""
    d = date_type.fromisoformat(value)
    weekdays = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
    months = (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    )
    return f"{weekdays[d.weekday()]}, {months[d.month - 1]} {d.day}, {d.year}"


def _number(value: float, places: int) -> str:
    # Fixed precision keeps output byte-stable; trailing zeros dropped
    text = f"{value:.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def _px(value: float) -> str:
    return f"{_number(value, 2)}px"


def _pct(value: float) -> str:
    return f"{_number(value, 4)}%"


def _status_css() -> str:
    rules = []
    for status, style in STATUS_STYLES.items():
        rules.append(
            f"""
        .appointment.{status.value} {{
          background: {style.backgroundColor};
          border-color: {style.borderColor};
          color: {style.textColor};
        }}
        .legend-dot.{status.value} {{
          background: {style.backgroundColor};
          border-color: {style.borderColor};
        }}"""
        )
    return "".join(rules)


def _appointment_html(apt: PlacedAppointment) -> str:
    return f"""
          <div class="appointment {apt.status} column-{apt.column}" style="top: {_px(apt.top)}; height: {_px(apt.height)}; left: calc({_pct(apt.left_percent)} + 4px); width: calc({_pct(apt.width_percent)} - 8px);">
            <div class="appointment-client">{sanitize_string(apt.client)}</div>
            <div class="appointment-service">{sanitize_string(apt.service)}</div>
            <div class="appointment-time">{apt.start_time} - {apt.end_time}</div>
          </div>"""


def _member_column_html(lane: MemberLane, layout: AgendaLayout) -> str:
    slot_count = layout.window.total_minutes // SLOT_MINUTES
    grid_lines = "".join(
        f'<div class="time-grid-line" style="top: {i * layout.slot_height}px;"></div>'
        for i in range(slot_count + 1)
    )
    appointments = "".join(_appointment_html(apt) for apt in lane.appointments)
    return f"""
        <div class="member-column" style="height: {layout.track_height}px;">
          {grid_lines}{appointments}
        </div>"""


def render_layout_html(layout: AgendaLayout) -> str:
    """
    Emit a self-contained HTML document for the layout.

    Only system fonts and inline CSS are used so the page can be
    rasterized without network access. Output depends on the layout alone.
    """
    window = layout.window
    member_count = len(layout.members)
    slot_count = window.total_minutes // SLOT_MINUTES

    time_slots = "".join(
        f'<div class="time-slot">{minutes_to_time(window.start_minutes + i * SLOT_MINUTES)}</div>'
        for i in range(slot_count)
    )
    member_headers = "".join(
        f'<div class="member-header">{sanitize_string(lane.name)}</div>' for lane in layout.members
    )
    member_columns = "".join(_member_column_html(lane, layout) for lane in layout.members)
    legend = "".join(
        f"""
        <div class="legend-item">
          <div class="legend-dot {status.value}"></div>
          <span>{style.label}</span>
        </div>"""
        for status, style in STATUS_STYLES.items()
    )

    html = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <style>
        * {{
          margin: 0;
          padding: 0;
          box-sizing: border-box;
        }}

        body {{
          font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
          background: #f8fafc;
          padding: 20px;
          line-height: 1.4;
        }}

        .header {{
          text-align: center;
          margin-bottom: 30px;
          background: white;
          padding: 25px;
          border-radius: 12px;
          box-shadow: 0 2px 8px rgba(0,0,0,0.1);
        }}

        .header h1 {{
          color: #1e293b;
          font-size: 42px;
          margin-bottom: 8px;
          font-weight: 700;
        }}

        .header h2 {{
          color: #64748b;
          font-size: 23px;
          font-weight: 500;
        }}

        .calendar-container {{
          background: white;
          border-radius: 12px;
          overflow: hidden;
          box-shadow: 0 4px 12px rgba(0,0,0,0.1);
          margin-bottom: 20px;
        }}

        .calendar-header,
        .calendar-body {{
          display: grid;
          grid-template-columns: {TIME_COLUMN_WIDTH}px repeat({member_count}, 1fr);
        }}

        .calendar-header {{
          border-bottom: 2px solid #cbd5e1;
        }}

        .calendar-body {{
          position: relative;
        }}

        .time-header {{
          background: #f1f5f9;
          font-weight: 600;
          color: #475569;
          text-align: center;
          padding: 16px 12px;
          border-right: 1px solid #cbd5e1;
          font-size: 17px;
        }}

        .member-header {{
          background: #000000;
          color: white;
          font-weight: 600;
          text-align: center;
          font-size: 21px;
          padding: 16px 12px;
          border-right: 1px solid #cbd5e1;
        }}

        .time-column {{
          background: #f8fafc;
          border-right: 1px solid #cbd5e1;
        }}

        .time-slot {{
          height: {layout.slot_height}px;
          border-bottom: 1px solid #cbd5e1;
          display: flex;
          align-items: center;
          justify-content: center;
          font-size: 17px;
          font-weight: 500;
          color: #64748b;
        }}

        .member-column {{
          position: relative;
          border-right: 1px solid #cbd5e1;
          background: white;
        }}

        .time-grid-line {{
          position: absolute;
          left: 0;
          right: 0;
          height: 1px;
          background: #cbd5e1;
          z-index: 1;
        }}

        .appointment {{
          position: absolute;
          border-radius: 6px;
          padding: 6px 8px;
          font-size: 14px;
          border: 1px solid;
          z-index: 10;
          overflow: hidden;
        }}

        .appointment-client {{
          font-weight: 600;
          margin-bottom: 2px;
          font-size: 16px;
          white-space: nowrap;
          overflow: hidden;
          text-overflow: ellipsis;
        }}

        .appointment-service {{
          font-size: 13px;
          opacity: 0.9;
          margin-bottom: 2px;
          white-space: nowrap;
          overflow: hidden;
          text-overflow: ellipsis;
        }}

        .appointment-time {{
          font-size: 12px;
          opacity: 0.7;
          font-weight: 500;
        }}

        .legend {{
          display: flex;
          justify-content: center;
          gap: 20px;
          padding: 20px;
          background: white;
          border-radius: 8px;
          box-shadow: 0 2px 4px rgba(0,0,0,0.05);
          flex-wrap: wrap;
        }}

        .legend-item {{
          display: flex;
          align-items: center;
          gap: 8px;
          font-size: 16px;
          font-weight: 500;
        }}

        .legend-dot {{
          width: 16px;
          height: 16px;
          border-radius: 4px;
          border: 1px solid;
        }}
{_status_css()}
  </style>
</head>
<body>
  <div class="header">
    <h1>📅 Daily Agenda {sanitize_string(layout.organization.name)}</h1>
    <h2>{format_agenda_date(layout.date)}</h2>
  </div>

  <div class="calendar-container">
    <div class="calendar-header">
      <div class="time-header">Time</div>
      {member_headers}
    </div>

    <div class="calendar-body">
      <div class="time-column">
        {time_slots}
      </div>
      {member_columns}
    </div>
  </div>

  <div class="legend">{legend}
  </div>
</body>
</html>
"""
    return html
