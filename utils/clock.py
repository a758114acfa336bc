"""
utils/clock.py
--------------
Current time in the application timezone.
Services take the clock as a parameter so tests can pin "now".
"""

from datetime import datetime, tzinfo

from dateutil import tz

from config import TIMEZONE


def local_zone() -> tzinfo:
    """Return the configured application timezone (validated in config)."""
    return tz.gettz(TIMEZONE)


def now() -> datetime:
    """Timezone-aware current timestamp."""
    return datetime.now(local_zone())
