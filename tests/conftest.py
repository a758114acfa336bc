"""
Shared fixtures.

Tests never touch PostgreSQL or Telegram: the service gets an in-memory
repository and a clock pinned to a Wednesday.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest

from models.expense import Expense
from services.expense_service import ExpenseService

# Wednesday; the Monday-based week runs Oct 12 - Oct 18
NOW = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)


def make_expense(cost, item="thing", created_at=NOW, user_id=1, id=None) -> Expense:
    return Expense(user_id=user_id, cost=Decimal(str(cost)), item=item, id=id, created_at=created_at)


class InMemoryExpenseRepository:
    """Stands in for ExpenseRepository with the same query methods."""

    def __init__(self, expenses=(), clock=lambda: NOW):
        self.clock = clock
        self.expenses: list[Expense] = []
        for expense in expenses:
            self.add(expense)

    def add(self, expense: Expense) -> Expense:
        expense.id = len(self.expenses) + 1
        if expense.created_at is None:
            expense.created_at = self.clock()
        self.expenses.append(expense)
        return expense

    def get_for_user(self, user_id: int, limit: Optional[int] = None) -> list[Expense]:
        rows = sorted(
            (e for e in self.expenses if e.user_id == user_id),
            key=lambda e: (e.created_at, e.id),
            reverse=True,
        )
        return rows if limit is None else rows[:limit]

    def search(self, user_id: int, query: str) -> list[Expense]:
        return [e for e in self.get_for_user(user_id) if query in e.item]

    def earliest(self, user_id: int) -> Optional[Expense]:
        rows = self.get_for_user(user_id)
        return rows[-1] if rows else None


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def repo():
    return InMemoryExpenseRepository()


@pytest.fixture
def service(repo):
    return ExpenseService(repo=repo, clock=lambda: NOW)
