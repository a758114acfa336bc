"""
repositories/user_repo.py
--------------------------
Data access layer for expense owners.
"""

from typing import Optional

from db.connection import cursor
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for the users table."""

    def ensure_user(self, telegram_id: int, first_name: Optional[str] = None) -> dict:
        """
        Insert the owner if missing, refreshing the stored name otherwise.

        Returns:
            Dict with keys 'id', 'telegram_id', 'first_name'.
        """
        sql = """
            INSERT INTO users (telegram_id, first_name)
            VALUES (%s, %s)
            ON CONFLICT (telegram_id) DO UPDATE SET first_name = EXCLUDED.first_name
            RETURNING id, telegram_id, first_name;
        """
        try:
            with cursor() as cur:
                cur.execute(sql, (telegram_id, first_name))
                row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to ensure user {telegram_id}: {e}")
            raise

        return {"id": row[0], "telegram_id": row[1], "first_name": row[2]}
