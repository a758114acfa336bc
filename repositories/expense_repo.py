"""
repositories/expense_repo.py
-----------------------------
Data access layer for expenses.
All SQL queries related to the `expenses` table live here.
Every query is scoped to a single owner.
"""

from decimal import Decimal
from typing import Optional

from db.connection import cursor
from models.expense import Expense
from utils.clock import local_zone
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, user_id, cost, item, created_at"


def _like_pattern(query: str) -> str:
    """Wrap ``query`` in % wildcards, escaping LIKE metacharacters."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ExpenseRepository:
    """Repository for the expenses table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, expense: Expense) -> Expense:
        """
        Insert a new expense.

        Args:
            expense: A validated Expense without an id.

        Returns:
            The same Expense with its `id` and `created_at` populated.
        """
        sql = """
            INSERT INTO expenses (user_id, cost, item)
            VALUES (%s, %s, %s)
            RETURNING id, created_at;
        """
        try:
            with cursor() as cur:
                cur.execute(sql, (expense.user_id, expense.cost, expense.item))
                row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to add expense for user {expense.user_id}: {e}")
            raise

        expense.id = row[0]
        expense.created_at = row[1].astimezone(local_zone())
        logger.info(f"Added expense #{expense.id} for user {expense.user_id}")
        return expense

    # ── READ ──────────────────────────────────────────────

    def get_for_user(self, user_id: int, limit: Optional[int] = None) -> list[Expense]:
        """
        Fetch a user's expenses, newest first.

        Args:
            user_id: Telegram user ID.
            limit: Optional maximum number of rows.
        """
        sql = f"SELECT {_COLUMNS} FROM expenses WHERE user_id = %s ORDER BY created_at DESC, id DESC"
        params: list = [user_id]
        if limit is not None:
            sql += " LIMIT %s"
            params.append(limit)

        with cursor() as cur:
            cur.execute(sql + ";", params)
            return [self._row_to_expense(r) for r in cur.fetchall()]

    def search(self, user_id: int, query: str) -> list[Expense]:
        """
        Fetch a user's expenses whose item contains ``query``, newest first.
        Matching is case-sensitive.
        """
        sql = f"""
            SELECT {_COLUMNS} FROM expenses
            WHERE user_id = %s AND item LIKE %s ESCAPE '\\'
            ORDER BY created_at DESC, id DESC;
        """
        with cursor() as cur:
            cur.execute(sql, (user_id, _like_pattern(query)))
            return [self._row_to_expense(r) for r in cur.fetchall()]

    def earliest(self, user_id: int) -> Optional[Expense]:
        """Return the user's first recorded expense, or None."""
        sql = f"""
            SELECT {_COLUMNS} FROM expenses
            WHERE user_id = %s
            ORDER BY created_at ASC, id ASC
            LIMIT 1;
        """
        with cursor() as cur:
            cur.execute(sql, (user_id,))
            row = cur.fetchone()
            return self._row_to_expense(row) if row else None

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_expense(row: tuple) -> Expense:
        """Convert a database row tuple to an Expense domain object."""
        return Expense(
            id=row[0],
            user_id=row[1],
            cost=Decimal(row[2]),
            item=row[3],
            created_at=row[4].astimezone(local_zone()),
        )
