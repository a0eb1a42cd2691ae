from decimal import Decimal

import pytest

from matchers import (
    AmountMatcher,
    DateAnchorMatcher,
    DescriptionLabelMatcher,
    DirectionMatcher,
    KeywordDirectionMatcher,
    NumericDateMatcher,
    parse_number,
)
from schema import Direction


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Nov 01, 2025 06:05 pm", "Nov 01, 2025"),
        ("paid on november 1 2025", "november 1 2025"),
        ("Sept 30, 2024\n11:59 am", "Sept 30, 2024"),
        ("no date at all", None),
        ("Nov 2025", None),
    ],
)
def test_date_anchor_extracts_date_without_time(text, expected):
    assert DateAnchorMatcher().extract(text) == expected


def test_date_anchor_match_includes_time_on_next_line():
    match = DateAnchorMatcher().first("Oct 09, 2025\n08:34 pm\nDEBIT")
    assert match.group(0) == "Oct 09, 2025\n08:34 pm"


@pytest.mark.parametrize("text", ["01/11/2025", "1-11-25", "2025.11.01"])
def test_numeric_dates(text):
    assert NumericDateMatcher().extract(f"on {text} paid") == text


@pytest.mark.parametrize(
    "text, expected",
    [
        ("DEBIT ₹1,500 Paid to X", Decimal("1500")),
        ("₹ 12,34,567 received", Decimal("1234567")),
        ("$1,234,567.89 wire", Decimal("1234567.89")),
        ("fee €5 and ₹10", Decimal("5")),
        ("1,500 without symbol", None),
    ],
)
def test_amount_matcher(text, expected):
    assert AmountMatcher().extract(text) == expected


def test_amount_matcher_custom_symbols():
    matcher = AmountMatcher(["Rs.", "INR"])
    assert matcher.extract("Rs. 2,500 paid") == Decimal("2500")
    assert matcher.extract("INR1,000") == Decimal("1000")
    assert matcher.extract("₹300") is None


def test_thousands_separators_removed():
    assert parse_number("1,234,567") == Decimal("1234567")
    assert parse_number("1,00,000.50") == Decimal("100000.50")
    assert parse_number(",") is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("CREDIT ₹5", Direction.CREDIT),
        ("debit ₹5", Direction.DEBIT),
        ("DEBIT card reversal CREDIT", Direction.CREDIT),
        ("Amount credited", Direction.CREDIT),
        ("₹5 paid", Direction.UNKNOWN),
    ],
)
def test_direction_from_explicit_markers(text, expected):
    assert DirectionMatcher().extract(text) is expected


def test_keyword_direction_uses_whole_words():
    matcher = KeywordDirectionMatcher()
    assert matcher.extract("Money received from Dad") is Direction.CREDIT
    assert matcher.extract("Paid to Zomato") is Direction.DEBIT
    assert matcher.extract("Unpaid invoice reminder") is Direction.UNKNOWN


def test_description_label_runs_to_end_of_line():
    matcher = DescriptionLabelMatcher()
    assert matcher.extract("DEBIT ₹1,500 Paid to GTPL HATHWAY LIMITED\nTxn 1") == "Paid to GTPL HATHWAY LIMITED"
    assert matcher.extract("transfer from savings  \n") == "transfer from savings"
    assert matcher.extract("Paid to\nnext line") is None
    assert matcher.extract("nothing labeled") is None
