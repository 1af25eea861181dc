"""
Unit tests for entry value interpretation and validation.
"""

import pytest

from routinely.service.entry import (
    EntryValidationError,
    completion_progress,
    day_value,
    is_completed,
    parse_entry_value,
    parse_numeric,
    validate_entry_value,
)
from tests.factories import FieldFactory, make_entry


@pytest.fixture
def checkbox():
    return FieldFactory.create(id="cb", name="Stretch")


@pytest.fixture
def number():
    return FieldFactory.create(id="num", name="Water", type="number", unit="ml")


# ===================
# INTERPRETATION
# ===================


class TestInterpretation:
    @pytest.mark.parametrize("value", [True, "true"])
    def test_completed_values(self, value):
        assert is_completed(value) is True

    @pytest.mark.parametrize("value", [False, "false", None, "TRUE", "yes", "1", 1])
    def test_not_completed_values(self, value):
        assert is_completed(value) is False

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("200", 200.0),
            (" 2.5 ", 2.5),
            (7, 7.0),
            (None, 0.0),
            ("abc", 0.0),
            ("", 0.0),
            ("nan", 0.0),
            ("-inf", 0.0),
            (True, 1.0),
        ],
    )
    def test_parse_numeric(self, value, expected):
        assert parse_numeric(value) == expected

    def test_day_value(self, checkbox, number):
        assert day_value(checkbox, "true") == 1.0
        assert day_value(checkbox, "false") == 0.0
        assert day_value(number, "150") == 150.0
        assert day_value(number, "oops") == 0.0


# ===================
# PARSING USER INPUT
# ===================


class TestParseEntryValue:
    @pytest.mark.parametrize("raw", ["true", "Y", "yes", "x", "1", " t "])
    def test_checkbox_true_spellings(self, checkbox, raw):
        assert parse_entry_value(checkbox, raw) == "true"

    @pytest.mark.parametrize("raw", ["false", "N", "no", "0", "", None])
    def test_checkbox_false_spellings(self, checkbox, raw):
        assert parse_entry_value(checkbox, raw) == "false"

    def test_checkbox_rejects_other_input(self, checkbox):
        with pytest.raises(EntryValidationError):
            parse_entry_value(checkbox, "maybe")

    def test_number_kept_as_given(self, number):
        assert parse_entry_value(number, " 1500 ") == "1500"
        assert parse_entry_value(number, "-2.25") == "-2.25"

    @pytest.mark.parametrize("raw", ["lots", "", "inf", "nan"])
    def test_number_rejects_non_finite_or_text(self, number, raw):
        with pytest.raises(EntryValidationError):
            parse_entry_value(number, raw)


class TestValidateEntryValue:
    def test_checkbox(self, checkbox):
        assert validate_entry_value(checkbox, True)
        assert validate_entry_value(checkbox, "false")
        with pytest.raises(EntryValidationError):
            validate_entry_value(checkbox, "yes")

    def test_number(self, number):
        assert validate_entry_value(number, 3)
        assert validate_entry_value(number, "3.5")
        with pytest.raises(EntryValidationError):
            validate_entry_value(number, None)
        with pytest.raises(EntryValidationError):
            validate_entry_value(number, "three")


# ===================
# DAILY PROGRESS
# ===================


class TestCompletionProgress:
    def test_counts_completed_checkbox_fields(self, checkbox, number):
        other = FieldFactory.create(id="cb2")
        entries = [
            make_entry("2024-01-05", "cb", "true"),
            make_entry("2024-01-05", "cb2", "false"),
            make_entry("2024-01-05", "num", "1200"),
        ]

        assert completion_progress([checkbox, other, number], entries) == (1, 2)

    def test_no_checkbox_fields(self, number):
        assert completion_progress([number], []) == (0, 0)
