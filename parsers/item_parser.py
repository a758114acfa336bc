"""
parsers/item_parser.py
----------------------
Extracts a cost from free-text expense entries such as "4.50 on coffee".

Responsibilities:
    - Recognise a leading amount (integer or up to two decimals).
    - Drop an optional "on"/"for" connector.
    - Return the remaining text as the item description.
"""

import re
from decimal import Decimal
from typing import Optional

from utils.logger import get_logger

logger = get_logger(__name__)

# "<amount> [on|for] <item>", e.g. "12 lunch", "3.5 for bus ticket".
# Anchors are per line: the first line of a message that fits wins.
_COST_PATTERN = re.compile(r"^(\d+\.\d{1,2}|\d+)\s*(?:on|for)*\s+(\S.*)$", re.MULTILINE)


def extract_cost_from_item(
    item: Optional[str], cost: Optional[Decimal] = None
) -> tuple[Optional[Decimal], Optional[str]]:
    """
    Pull the cost out of an item description when no cost was given.

    Args:
        item: Raw text typed by the user, e.g. "5 on sandwich".
        cost: Cost already supplied by the caller, if any.

    Returns:
        A ``(cost, item)`` tuple. When ``cost`` is given, or no line of the text
        starts with an amount followed by a description, the input is returned
        unchanged and the cost may still be None.
    """
    if cost is not None:
        return cost, item
    if not item:
        return None, item

    match = _COST_PATTERN.search(item)
    if not match:
        logger.debug(f"No cost found in item: {item!r}")
        return None, item

    return Decimal(match.group(1)), match.group(2)
