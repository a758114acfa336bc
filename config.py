"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os

from dateutil import tz
from dotenv import load_dotenv

load_dotenv()


def check_timezone(name: str) -> str:
    """
    Return ``name`` if it is a known IANA zone.

    Raises:
        ValueError: For unknown names, which PostgreSQL would reject too.
    """
    if not name or tz.gettz(name) is None:
        raise ValueError(f"Unknown TIMEZONE: {name!r}")
    return name


# ── Telegram ──────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "expense_log")
DB_USER: str = os.getenv("DB_USER", "expenselog_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Security ──────────────────────────────────────────────
_raw_ids = os.getenv("ALLOWED_USER_IDS", "")
ALLOWED_USER_IDS: list[int] = (
    [int(uid.strip()) for uid in _raw_ids.split(",") if uid.strip()]
    if _raw_ids
    else []
)

# ── Dates & periods ───────────────────────────────────────
TIMEZONE: str = check_timezone(os.getenv("TIMEZONE", "UTC"))
# 0 = Monday ... 6 = Sunday
WEEK_START_DAY: int = int(os.getenv("WEEK_START_DAY", "0"))

# ── Listing ───────────────────────────────────────────────
RECENT_EXPENSES_LIMIT: int = int(os.getenv("RECENT_EXPENSES_LIMIT", "25"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
