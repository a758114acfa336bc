"""
models/expense.py
-----------------
Domain model for a recorded expense.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

# Matches the NUMERIC(12,2) cost column
MAX_COST = Decimal("9999999999.99")
_CENTS = Decimal("0.01")


@dataclass
class Expense:
    """
    Represents a single expense entry.

    Attributes:
        user_id: Telegram user ID of the owner.
        cost: Amount spent. May be None until the parser or the user fills it in.
        item: Free-text description of what was bought.
        id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
    """
    user_id: Optional[int]
    cost: Optional[Decimal]
    item: Optional[str]
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def validate(self) -> dict[str, list[str]]:
        """
        Check the record before it is persisted.

        Returns:
            Mapping of field name to error messages. Empty when valid.
        """
        errors: dict[str, list[str]] = {}

        if self.user_id is None or self.user_id == "":
            errors.setdefault("user_id", []).append("can't be blank")

        cost = to_decimal(self.cost)
        if cost is None:
            errors.setdefault("cost", []).append("is not a number")
        elif cost <= 0:
            errors.setdefault("cost", []).append("must be greater than 0")
        elif cost > MAX_COST:
            errors.setdefault("cost", []).append(f"must be less than or equal to {MAX_COST}")
        elif cost != cost.quantize(_CENTS):
            errors.setdefault("cost", []).append("must have at most 2 decimal places")

        if not self.item or not self.item.strip():
            errors.setdefault("item", []).append("can't be blank")

        return errors


def to_decimal(value) -> Optional[Decimal]:
    """Coerce a cost value to Decimal, or None if it isn't numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None
