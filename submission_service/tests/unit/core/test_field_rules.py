"""
Unit tests for the individual field rules.
"""

import pytest

from submission_service.core.exceptions import ReasonCode
from submission_service.core.field_rules import (
    ACCEPTED,
    LengthRangeRule,
    PatternRule,
    PresenceRule,
    Rejected,
    TypeRule,
)


class TestPresenceRule:
    rule = PresenceRule(fields=("title", "description", "author"))

    def test_all_present(self):
        assert self.rule.evaluate({"title": "a", "description": "b", "author": "c"}) is ACCEPTED

    def test_reports_every_missing_field_in_declared_order(self):
        outcome = self.rule.evaluate({"description": "b"})

        assert isinstance(outcome, Rejected)
        assert outcome.reason_code == ReasonCode.MISSING_FIELD
        assert outcome.field == "title"
        assert outcome.context["missing"] == ["title", "author"]
        assert outcome.context["required"] == ["title", "description", "author"]

    def test_null_counts_as_missing(self):
        outcome = self.rule.evaluate({"title": None, "description": "b", "author": "c"})
        assert outcome.reason_code == ReasonCode.MISSING_FIELD
        assert outcome.context["missing"] == ["title"]

    def test_empty_string_is_present_by_default(self):
        assert self.rule.evaluate({"title": "", "description": "b", "author": "c"}) is ACCEPTED

    def test_empty_string_is_missing_when_strict(self):
        strict = PresenceRule(fields=("title",), reject_empty=True)
        outcome = strict.evaluate({"title": ""})
        assert outcome.reason_code == ReasonCode.MISSING_FIELD
        assert outcome.context["missing"] == ["title"]


class TestTypeRule:
    rule = TypeRule(expected_types=(("title", str), ("description", str), ("author", str)))

    def test_all_strings(self):
        assert self.rule.evaluate({"title": "a", "description": "b", "author": "c"}) is ACCEPTED

    def test_reports_each_mismatch_with_json_type_names(self):
        outcome = self.rule.evaluate({"title": 123, "description": "ok", "author": ["x"]})

        assert outcome.reason_code == ReasonCode.INVALID_TYPE
        assert outcome.field == "title"
        assert outcome.context["invalid"] == [
            {"field": "title", "expected": "string", "actual": "number"},
            {"field": "author", "expected": "string", "actual": "array"},
        ]

    def test_boolean_is_not_a_string(self):
        outcome = self.rule.evaluate({"title": True, "description": "b", "author": "c"})
        assert outcome.context["invalid"][0]["actual"] == "boolean"


class TestLengthRangeRule:
    title_rule = LengthRangeRule(field_name="title", min_length=5, max_length=100, label="Title")
    description_rule = LengthRangeRule(
        field_name="description", min_length=5, max_length=1000, label="Description", empty_is_distinct=True
    )

    @pytest.mark.parametrize("value", ["a" * 5, "a" * 100, "  " + "a" * 100 + "  "])
    def test_within_bounds_after_trimming(self, value):
        assert self.title_rule.evaluate({"title": value}) is ACCEPTED

    def test_too_short_context(self):
        outcome = self.title_rule.evaluate({"title": "  abcd  "})

        assert outcome.reason_code == ReasonCode.TOO_SHORT
        assert outcome.field == "title"
        assert outcome.context["currentLength"] == 4
        assert outcome.context["minimumRequired"] == 5
        assert outcome.context["providedValue"] == "  abcd  "

    def test_too_long_context(self):
        outcome = self.title_rule.evaluate({"title": "a" * 101})

        assert outcome.reason_code == ReasonCode.TOO_LONG
        assert outcome.context["currentLength"] == 101
        assert outcome.context["maximumAllowed"] == 100
        assert outcome.context["excessCharacters"] == 1

    def test_empty_title_is_plain_too_short(self):
        outcome = self.title_rule.evaluate({"title": "   "})
        assert outcome.reason_code == ReasonCode.TOO_SHORT
        assert outcome.context["currentLength"] == 0

    @pytest.mark.parametrize("value", ["", "   ", "\t\n "])
    def test_blank_description_is_empty_value(self, value):
        outcome = self.description_rule.evaluate({"description": value})

        assert outcome.reason_code == ReasonCode.EMPTY_VALUE
        assert outcome.field == "description"
        assert outcome.context == {"providedValue": value}

    def test_short_description_is_too_short_not_empty(self):
        outcome = self.description_rule.evaluate({"description": " x "})
        assert outcome.reason_code == ReasonCode.TOO_SHORT

    def test_length_counts_characters_not_bytes(self):
        assert self.title_rule.evaluate({"title": "ñáéíó"}) is ACCEPTED

    def test_non_string_value_is_rejected_as_invalid_type(self):
        outcome = self.title_rule.evaluate({"title": 12345})
        assert outcome.reason_code == ReasonCode.INVALID_TYPE

    def test_absent_value_is_rejected_as_missing(self):
        outcome = self.title_rule.evaluate({})
        assert outcome.reason_code == ReasonCode.MISSING_FIELD


class TestPatternRule:
    rule = PatternRule(field_name="author", label="Author name")

    @pytest.mark.parametrize("value", ["Ana-María López", "Ñoño", "Juan Pérez", "  Juan Pérez  ", "J. K. Rowling"])
    def test_valid_names(self, value):
        assert self.rule.evaluate({"author": value}) is ACCEPTED

    def test_lowercase_start(self):
        outcome = self.rule.evaluate({"author": "ana"})

        assert outcome.reason_code == ReasonCode.INVALID_FORMAT
        assert outcome.field == "author"
        assert [issue["check"] for issue in outcome.context["issues"]] == ["capital_start"]
        assert outcome.context["providedValue"] == "ana"
        assert outcome.context["recommendations"]

    def test_digit_and_too_few_letters_are_both_reported(self):
        outcome = self.rule.evaluate({"author": "A1"})

        assert outcome.reason_code == ReasonCode.INVALID_FORMAT
        assert [issue["check"] for issue in outcome.context["issues"]] == [
            "allowed_characters",
            "minimum_letters",
        ]


def test_rejected_details_flatten_context():
    outcome = Rejected(
        reason_code=ReasonCode.TOO_SHORT,
        message="Title too short",
        field="title",
        context={"currentLength": 0},
    )
    assert outcome.details() == {"reason_code": "TOO_SHORT", "field": "title", "currentLength": 0}
    assert not outcome.accepted
    assert ACCEPTED.accepted
