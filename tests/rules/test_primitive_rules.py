"""
Tests for the built-in type rules.
"""

from datetime import date, datetime

import pytest

from valtree.compiler import FieldContext
from valtree.core import MISSING
from valtree.exceptions import RuleOptionsError
from valtree.reporters import ApiErrorReporter
from valtree.rules import PRIMITIVE_RULES, is_array_like, is_plain_object


def check(rule_name, value, options=None):
    """Run one rule's both phases on a value; return (final value, violations)."""
    rule = PRIMITIVE_RULES[rule_name]
    meta = rule.compile("string", options or {})
    reporter = ApiErrorReporter()
    context = FieldContext(value, {"field": value}, None, "field", None, reporter)
    rule.validate(context.value, meta.compiled_options, context)
    return context.value, reporter.violations


class TestPredicates:
    """Test the shape predicates behind the object and array rules."""

    @pytest.mark.parametrize("value", [{}, {"a": 1}])
    def test_plain_objects(self, value):
        assert is_plain_object(value)

    @pytest.mark.parametrize("value", [[], (), None, "x", 1, MISSING])
    def test_not_plain_objects(self, value):
        assert not is_plain_object(value)

    def test_array_like(self):
        assert is_array_like([])
        assert is_array_like((1,))
        assert not is_array_like("abc")
        assert not is_array_like({"a": 1})


class TestStringRule:
    def test_accepts_strings(self):
        assert check("string", "")[1] == []

    @pytest.mark.parametrize("value", [1, None, b"bytes", ["x"]])
    def test_rejects_others(self, value):
        _, violations = check("string", value)
        assert [(v.rule, v.message) for v in violations] == [
            ("string", "string validation failed")
        ]

    def test_message_option(self):
        _, violations = check("string", 1, {"message": "text please"})
        assert violations[0].message == "text please"


class TestNumberRule:
    @pytest.mark.parametrize("value", [0, 3, -2.5])
    def test_accepts_numbers(self, value):
        assert check("number", value) == (value, [])

    @pytest.mark.parametrize("text, expected", [("42", 42), (" 7 ", 7), ("2.5", 2.5)])
    def test_casts_numeric_strings(self, text, expected):
        assert check("number", text) == (expected, [])

    @pytest.mark.parametrize("value", [True, "", "abc", "nan", "inf", None, [1]])
    def test_rejects_others(self, value):
        final, violations = check("number", value)
        assert final is value
        assert [v.rule for v in violations] == ["number"]


class TestBooleanRule:
    @pytest.mark.parametrize(
        "value, expected",
        [(True, True), (False, False), (1, True), (0, False), ("true", True),
         ("FALSE", False), ("on", True), ("1", True), ("0", False)],
    )
    def test_accepted_encodings(self, value, expected):
        assert check("boolean", value) == (expected, [])

    @pytest.mark.parametrize("value", [2, "yes", None, "off"])
    def test_rejects_others(self, value):
        assert [v.rule for v in check("boolean", value)[1]] == ["boolean"]


class TestDateRule:
    def test_accepts_date_objects(self):
        today = date(2024, 5, 1)
        assert check("date", today) == (today, [])

    def test_parses_iso_strings(self):
        value, violations = check("date", "2024-05-01T10:30:00")
        assert value == datetime(2024, 5, 1, 10, 30)
        assert violations == []

    def test_parses_custom_format(self):
        value, _ = check("date", "01/05/2024", {"format": "%d/%m/%Y"})
        assert value == datetime(2024, 5, 1)

    def test_rejects_bad_strings(self):
        _, violations = check("date", "01/05/2024")
        assert [v.rule for v in violations] == ["date"]
        assert violations[0].args == {"format": None}

    def test_format_must_be_text(self):
        with pytest.raises(RuleOptionsError):
            PRIMITIVE_RULES["date"].compile("date", {"format": 12})


class TestShapeRules:
    def test_object_rule_excludes_arrays_and_none(self):
        assert check("object", {"a": 1})[1] == []
        assert [v.rule for v in check("object", [])[1]] == ["object"]
        assert [v.rule for v in check("object", None)[1]] == ["object"]

    def test_array_rule(self):
        assert check("array", [1])[1] == []
        assert [v.rule for v in check("array", "abc")[1]] == ["array"]

    def test_type_rules_are_sync_and_need_a_value(self):
        for name, rule in PRIMITIVE_RULES.items():
            meta = rule.compile("string", {})
            assert meta.name == name
            assert meta.is_async is False
            assert meta.allow_undefined is False

    @pytest.mark.parametrize("name", sorted(PRIMITIVE_RULES))
    def test_type_rules_report_absent_values(self, name):
        _, violations = check(name, MISSING)
        assert [v.rule for v in violations] == [name]
