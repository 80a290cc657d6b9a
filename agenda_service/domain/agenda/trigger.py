"""Send-hour check for agenda notifications, evaluated in each organization's timezone"""

import logging
from datetime import date, datetime, timedelta, timezone as dt_timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ...config import AGENDA_FALLBACK_UTC_OFFSET_HOURS

logger = logging.getLogger(__name__)


def _as_utc(now_utc: datetime) -> datetime:
    if now_utc.tzinfo is None:
        return now_utc.replace(tzinfo=dt_timezone.utc)
    return now_utc.astimezone(dt_timezone.utc)


def to_local_time(
    now_utc: datetime,
    tz_name: Optional[str],
    fallback_offset_hours: int = AGENDA_FALLBACK_UTC_OFFSET_HOURS,
) -> datetime:
    """
    Convert a UTC instant to the organization's wall clock.

    Unknown or empty timezone names fall back to a fixed UTC offset.
    """
    now_utc = _as_utc(now_utc)
    try:
        if not tz_name:
            raise ZoneInfoNotFoundError("empty timezone")
        return now_utc.astimezone(ZoneInfo(tz_name))
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.warning(
            f"⚠️ Could not resolve timezone {tz_name!r} ({e}) - using UTC{fallback_offset_hours:+d}"
        )
        return now_utc.astimezone(dt_timezone(timedelta(hours=fallback_offset_hours)))


def local_today(now_utc: datetime, tz_name: Optional[str]) -> date:
    return to_local_time(now_utc, tz_name).date()


def should_trigger(now_utc: datetime, tz_name: Optional[str], send_time: str) -> bool:
    """
    True when the local hour in tz_name equals the configured send hour.

    send_time is "HH:MM" or "HH:MM:SS"; only the hour is compared.
    """
    local_now = to_local_time(now_utc, tz_name)
    configured_hour = int(str(send_time).split(":")[0])
    should_process = local_now.hour == configured_hour

    logger.debug(
        f"🕐 Local {local_now:%H:%M} ({tz_name}) vs configured {send_time} - "
        f"{'PROCESS' if should_process else 'WAIT'}"
    )
    return should_process
