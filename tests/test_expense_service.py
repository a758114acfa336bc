from datetime import timedelta
from decimal import Decimal

from tests.conftest import NOW, InMemoryExpenseRepository, make_expense
from services.expense_service import ExpenseService
from utils.periods import Unit


class TestAddExpense:

    def test_cost_is_extracted_from_text(self, service, repo):
        result = service.add_expense(1, "4.50 on coffee")

        assert result["success"] is True
        saved = result["expense"]
        assert (saved.cost, saved.item, saved.user_id) == (Decimal("4.50"), "coffee", 1)
        assert saved.created_at == NOW
        assert repo.get_for_user(1) == [saved]
        assert "4.50" in result["message"]

    def test_explicit_cost_keeps_item_as_typed(self, service):
        result = service.add_expense(1, "7 on tea", cost="5")

        assert result["expense"].cost == Decimal("5")
        assert result["expense"].item == "7 on tea"

    def test_missing_cost_is_reported_not_saved(self, service, repo):
        result = service.add_expense(1, "coffee")

        assert result == {"success": False, "errors": {"cost": ["is not a number"]}}
        assert repo.expenses == []

    def test_zero_cost_is_rejected(self, service):
        result = service.add_expense(1, "0 gum")
        assert result["errors"] == {"cost": ["must be greater than 0"]}

    def test_cost_too_large_for_the_column_is_rejected(self, service, repo):
        result = service.add_expense(1, "123456789012 coffee")

        assert result["success"] is False
        assert result["errors"] == {"cost": ["must be less than or equal to 9999999999.99"]}
        assert repo.expenses == []

    def test_largest_cost_is_accepted(self, service):
        assert service.add_expense(1, "9999999999.99 house")["success"] is True

    def test_fractions_of_a_cent_are_rejected(self, service, repo):
        result = service.add_expense(1, "gum", cost=Decimal("0.001"))

        assert result["success"] is False
        assert result["errors"] == {"cost": ["must have at most 2 decimal places"]}
        assert repo.expenses == []

    def test_trailing_zeros_are_not_extra_places(self, service):
        assert service.add_expense(1, "gum", cost=Decimal("1.500"))["success"] is True

    def test_blank_item_and_owner_are_rejected(self, service, repo):
        result = service.add_expense(None, "  ", cost=Decimal("3"))

        assert result["errors"] == {"user_id": ["can't be blank"], "item": ["can't be blank"]}
        assert repo.expenses == []


class TestAggregates:

    def test_empty_history(self, service):
        assert service.total_for(1, "month") == 0
        assert service.average_for(1, "day") == 0
        assert service.averages_for(1, "week") == []
        assert service.is_above_average(1, "day") is False

    def test_history_is_scoped_to_owner(self):
        repo = InMemoryExpenseRepository([
            make_expense(10, created_at=NOW - timedelta(hours=1), user_id=1),
            make_expense(50, created_at=NOW - timedelta(days=20), user_id=2),
        ])
        service = ExpenseService(repo=repo, clock=lambda: NOW)

        assert service.total_for(1, "month") == Decimal("10")
        assert service.average_for(1, "day") == Decimal("10")
        assert service.average_for(2, "day") == Decimal("2.5")

    def test_get_averages_covers_every_unit(self):
        repo = InMemoryExpenseRepository([
            make_expense(30, created_at=NOW - timedelta(days=1)),
            make_expense(30, created_at=NOW - timedelta(days=2)),
        ])
        service = ExpenseService(repo=repo, clock=lambda: NOW)

        averages = service.get_averages(1)

        assert set(averages) == set(Unit)
        assert averages[Unit.DAY] == Decimal("30")
        assert averages[Unit.WEEK] == Decimal("30")
        assert averages[Unit.MONTH] == Decimal("30")

    def test_is_above_average(self):
        repo = InMemoryExpenseRepository([
            make_expense(100, created_at=NOW),
            make_expense(10, created_at=NOW - timedelta(days=10)),
        ])
        service = ExpenseService(repo=repo, clock=lambda: NOW)
        assert service.is_above_average(1, "day") is True


class TestLists:

    def test_recent_is_limited(self):
        repo = InMemoryExpenseRepository(
            [make_expense(1, f"item {i}", NOW - timedelta(hours=i)) for i in range(30)]
        )
        service = ExpenseService(repo=repo, clock=lambda: NOW)

        groups = service.recent_grouped_by_relative_date(1, limit=25)

        assert sum(len(g) for g in groups.values()) == 25
        assert groups["Today"][0].item == "item 0"

    def test_search_groups_matches_for_owner_only(self):
        mine = make_expense(3, "coffee", NOW - timedelta(days=1))
        repo = InMemoryExpenseRepository([
            mine,
            make_expense(4, "tea", NOW),
            make_expense(5, "coffee", NOW, user_id=2),
        ])
        service = ExpenseService(repo=repo, clock=lambda: NOW)

        assert service.search_grouped_by_relative_date(1, "coffee") == {"Yesterday": [mine]}


class TestSummaries:

    def test_format_groups_orders_labels_newest_first(self):
        groups = {
            "Last Month": [make_expense(2, "books")],
            "Today": [make_expense("4.5", "coffee")],
        }
        text = ExpenseService.format_groups(groups)

        assert text.index("Today") < text.index("Last Month")
        assert "4.50 coffee" in text

    def test_recent_summary_without_expenses(self, service):
        assert service.get_recent_summary(1).startswith("No expenses yet")

    def test_recent_summary_includes_averages(self, service):
        service.add_expense(1, "12 lunch")
        text = service.get_recent_summary(1)

        assert "Today:" in text
        assert "per day: 12.00" in text
        assert "per month: 12.00" in text

    def test_search_summary_without_matches(self, service):
        assert service.get_search_summary(1, "rent") == 'No expenses matching "rent".'
