from decimal import Decimal

import pytest

from parsers.item_parser import extract_cost_from_item


@pytest.mark.parametrize("text", ["5 coffee", "5 on coffee", "5 for coffee", "5on coffee"])
def test_connector_words_are_dropped(text):
    assert extract_cost_from_item(text) == (Decimal("5"), "coffee")


@pytest.mark.parametrize(
    "text, cost, item",
    [
        ("4.50 on coffee", Decimal("4.50"), "coffee"),
        ("3.5 for bus ticket", Decimal("3.5"), "bus ticket"),
        ("0 gum", Decimal("0"), "gum"),
        ("120 new shoes for running", Decimal("120"), "new shoes for running"),
    ],
)
def test_extracts_amount_and_item(text, cost, item):
    assert extract_cost_from_item(text) == (cost, item)


def test_collapses_spaces_after_connector():
    assert extract_cost_from_item("7 on     lunch") == (Decimal("7"), "lunch")


def test_item_starting_with_connector_letters():
    assert extract_cost_from_item("5 onion rings") == (Decimal("5"), "onion rings")


def test_existing_cost_is_kept_and_item_untouched():
    cost = Decimal("5.00")
    assert extract_cost_from_item("7 on tea", cost) == (cost, "7 on tea")
    assert extract_cost_from_item("", cost) == (cost, "")


@pytest.mark.parametrize(
    "text",
    [
        "42",
        "42   ",
        "-5 coffee",
        "coffee 5",
        "12.345 pens",
        "",
    ],
)
def test_no_match_leaves_cost_unset(text):
    assert extract_cost_from_item(text) == (None, text)


def test_missing_item():
    assert extract_cost_from_item(None) == (None, None)


def test_multi_line_message_uses_first_line():
    assert extract_cost_from_item("5 coffee\nwith cake") == (Decimal("5"), "coffee")


def test_amount_on_a_later_line():
    assert extract_cost_from_item("lunch\n12 for pizza") == (Decimal("12"), "pizza")
