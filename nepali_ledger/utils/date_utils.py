"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo


def local_now(tz_name: Optional[str] = None) -> datetime:
    """Current wall-clock time in ``tz_name``, or the system local zone when unset"""
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now().astimezone()


def local_today(tz_name: Optional[str] = None) -> date:
    return local_now(tz_name).date()


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]
