# delivery_app/utils/timezones.py
from datetime import datetime
from zoneinfo import ZoneInfo

UTC = ZoneInfo("UTC")


def local_midnight_utc(now_utc: datetime, tz_name: str = "UTC") -> datetime:
    """
    Midnight of the local day containing ``now_utc``, as a naive UTC datetime.

    ``now_utc`` is naive UTC (how timestamps are stored). The day boundary is
    taken in ``tz_name`` so "today" means the driver's calendar day.
    """
    tz = ZoneInfo(tz_name)
    local_now = now_utc.replace(tzinfo=UTC).astimezone(tz)
    local_midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return local_midnight.astimezone(UTC).replace(tzinfo=None)
