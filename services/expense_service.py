"""
services/expense_service.py
----------------------------
Business logic for recording expenses and reporting on them.
Orchestrates between the item parser, the ExpenseRepository and the
pure aggregation/grouping functions.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from config import RECENT_EXPENSES_LIMIT
from models.expense import Expense, to_decimal
from parsers.item_parser import extract_cost_from_item
from repositories.expense_repo import ExpenseRepository
from services import aggregator, grouper
from utils import clock as default_clock
from utils.logger import get_logger
from utils.periods import Unit

logger = get_logger(__name__)


class ExpenseService:
    """
    Handles all business logic related to expenses.

    Workflow for a new entry:
        1. Receive raw text (and maybe an explicit cost) from the handler.
        2. Pull the cost out of the text when none was given.
        3. Validate the record.
        4. Persist via the repository.
        5. Return a user-friendly response.

    Args:
        repo: Expense store; defaults to the PostgreSQL repository.
        clock: Zero-argument callable returning the current aware datetime.
    """

    def __init__(self, repo=None, clock: Optional[Callable[[], datetime]] = None):
        self.repo = repo if repo is not None else ExpenseRepository()
        self.clock = clock or default_clock.now

    # ── CREATE ────────────────────────────────────────────

    def add_expense(self, user_id: int, item: Optional[str], cost=None) -> dict:
        """
        Record a new expense.

        Args:
            user_id: Telegram user ID of the owner.
            item: Description, possibly prefixed with the cost ("5 on lunch").
            cost: Explicit cost; when given the item is stored as typed.

        Returns:
            ``{"success": True, "expense": Expense, "message": str}`` or
            ``{"success": False, "errors": {field: [messages]}}``.
        """
        cost, item = extract_cost_from_item(item, cost)
        expense = Expense(user_id=user_id, cost=cost, item=item)

        errors = expense.validate()
        if errors:
            logger.info(f"Rejected expense for user {user_id}: {errors}")
            return {"success": False, "errors": errors}

        expense.cost = to_decimal(expense.cost)
        saved = self.repo.add(expense)
        return {
            "success": True,
            "expense": saved,
            "message": f"Recorded {saved.cost:.2f} for {saved.item} (#{saved.id})",
        }

    # ── AGGREGATES ────────────────────────────────────────

    def total_for(self, user_id: int, unit) -> Decimal:
        """Total spent in the current day, week or month."""
        return aggregator.total_for(self.repo.get_for_user(user_id), unit, self.clock())

    def averages_for(self, user_id: int, unit) -> list[Decimal]:
        """Per-bucket average costs, most recent bucket first."""
        return aggregator.averages_for(self.repo.get_for_user(user_id), unit, self.clock())

    def average_for(self, user_id: int, unit) -> Decimal:
        """Overall average spend per day, week or month."""
        return aggregator.average_for(
            self.repo.get_for_user(user_id), self.repo.earliest(user_id), unit, self.clock()
        )

    def is_above_average(self, user_id: int, unit) -> bool:
        """Whether the latest period's average beats the overall average."""
        return aggregator.is_above_average(
            self.repo.get_for_user(user_id), self.repo.earliest(user_id), unit, self.clock()
        )

    def get_averages(self, user_id: int) -> dict[Unit, Decimal]:
        """Average for every unit, loading the history once."""
        expenses = self.repo.get_for_user(user_id)
        earliest = self.repo.earliest(user_id)
        now = self.clock()
        return {unit: aggregator.average_for(expenses, earliest, unit, now) for unit in Unit}

    # ── LISTS ─────────────────────────────────────────────

    def recent_grouped_by_relative_date(
        self, user_id: int, limit: int = RECENT_EXPENSES_LIMIT
    ) -> dict[str, list[Expense]]:
        """Most recent expenses grouped under "Today", "Yesterday", ..."""
        expenses = self.repo.get_for_user(user_id, limit=limit)
        return grouper.group_by_relative_date(expenses, self.clock())

    def search_grouped_by_relative_date(self, user_id: int, query: str) -> dict[str, list[Expense]]:
        """Expenses whose item contains ``query``, grouped by relative date."""
        return grouper.group_by_relative_date(self.repo.search(user_id, query), self.clock())

    # ── TEXT RENDERING ────────────────────────────────────

    @staticmethod
    def format_groups(groups: dict[str, list[Expense]]) -> str:
        """Render grouped expenses, newest label first."""
        lines = []
        for label in grouper.RELATIVE_DATE_LABELS:
            if label not in groups:
                continue
            lines.append(f"{label}:")
            for e in groups[label]:
                lines.append(f"  • {e.cost:.2f} {e.item}")
        return "\n".join(lines)

    def get_averages_summary(self, user_id: int) -> str:
        """Averages, current-period totals and above-average markers."""
        expenses = self.repo.get_for_user(user_id)
        earliest = self.repo.earliest(user_id)
        now = self.clock()

        lines = ["Averages:"]
        for unit in Unit:
            average = aggregator.average_for(expenses, earliest, unit, now)
            total = aggregator.total_for(expenses, unit, now)
            marker = " ▲" if aggregator.is_above_average(expenses, earliest, unit, now) else ""
            lines.append(
                f"  per {unit.value}: {average:.2f}{marker} (this {unit.value}: {total:.2f})"
            )
        return "\n".join(lines)

    def get_recent_summary(self, user_id: int) -> str:
        groups = self.recent_grouped_by_relative_date(user_id)
        if not groups:
            return "No expenses yet. Send something like \"4.50 on coffee\"."
        return f"{self.format_groups(groups)}\n\n{self.get_averages_summary(user_id)}"

    def get_search_summary(self, user_id: int, query: str) -> str:
        groups = self.search_grouped_by_relative_date(user_id, query)
        if not groups:
            return f"No expenses matching \"{query}\"."
        count = sum(len(g) for g in groups.values())
        return (
            f"Results for \"{query}\" ({count}):\n"
            f"{self.format_groups(groups)}\n\n{self.get_averages_summary(user_id)}"
        )
