from datetime import date, datetime
from typing import Optional

import pandas as pd


START_OF_DAY = "000000"
# Midday keeps importers that shift by the local offset on the same date.
POSTING_TIME = "130000"


# ---------- datetime helpers ----------
def ofx_datetime(dt: Optional[datetime], tz_offset: str = "-6") -> Optional[str]:
    """Format a timestamp as ``YYYYMMDDHHMMSS.000[offset]``.

    ``tz_offset`` is written verbatim inside the brackets; the timestamp itself
    is not converted.  ``None`` or ``NaT`` inputs return ``None``.
    """

    if dt is None or pd.isna(dt):
        return None
    ts = pd.Timestamp(dt)
    return f"{ts.strftime('%Y%m%d%H%M%S')}.000[{tz_offset}]"


def ofx_date(value: date, time_of_day: str = POSTING_TIME) -> str:
    """Render a calendar date with a fixed ``HHMMSS`` time of day."""
    return f"{value.strftime('%Y%m%d')}{time_of_day}"
