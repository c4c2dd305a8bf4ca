import os
from datetime import datetime, timedelta
from typing import Optional
from pytz import timezone

# Service timezone (override with APP_TIMEZONE)
APP_TZ = timezone(os.getenv("APP_TIMEZONE", "Europe/Bucharest"))

def get_current_time() -> datetime:
    """Get current time in the service timezone."""
    return datetime.now(APP_TZ)

def get_today_str() -> str:
    """Get today's date string in the service timezone (YYYY-MM-DD)."""
    return get_current_time().strftime("%Y-%m-%d")

def get_date_str(days_ahead: int = 0) -> str:
    """Get the date string (YYYY-MM-DD) a number of days from today."""
    return (get_current_time() + timedelta(days=days_ahead)).strftime("%Y-%m-%d")

def get_current_season(now: Optional[datetime] = None) -> int:
    """
    Season start year for European calendars.

    July onwards belongs to the season starting this year; January-June
    to the one that started last year.
    """
    now = now or get_current_time()
    return now.year if now.month >= 7 else now.year - 1
