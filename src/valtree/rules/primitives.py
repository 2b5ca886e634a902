"""
Built-in type rules.

Each rule checks that a present value has the expected type. Rules that
accept a textual form of their type (numbers, booleans, dates) convert the
value through ``context.mutate`` so later rules and the output see the
converted value.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from valtree.core.types import RuleOptions
from valtree.exceptions import RuleOptionsError
from valtree.rules.base import Rule

_TRUE_VALUES = frozenset({"true", "1", "on"})
_FALSE_VALUES = frozenset({"false", "0"})


def is_plain_object(value: Any) -> bool:
    """
    Check that ``value`` is a keyed container.

    Lists and tuples are excluded explicitly and ``None`` is never an
    object, matching the object notion of JSON documents.
    """
    if value is None or isinstance(value, (list, tuple)):
        return False
    return isinstance(value, Mapping)


def is_array_like(value: Any) -> bool:
    """Check that ``value`` is an ordered list of members (list or tuple)."""
    return isinstance(value, (list, tuple))


class StringRule(Rule):
    name = "string"
    default_message = "string validation failed"

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if not isinstance(value, str):
            self.fail(context, compiled_options)


class NumberRule(Rule):
    """Accept ints and floats; numeric strings are converted."""

    name = "number"
    default_message = "number validation failed"

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if isinstance(value, bool):
            self.fail(context, compiled_options)
            return
        if isinstance(value, (int, float)):
            return
        if isinstance(value, str):
            converted = _to_number(value)
            if converted is not None:
                context.mutate(converted)
                return
        self.fail(context, compiled_options)


def _to_number(text: str) -> int | float | None:
    text = text.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    # "nan" and "inf" parse as floats but are not numbers a client sends
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


class BooleanRule(Rule):
    """Accept booleans plus the usual form encodings (``"on"``, ``"1"``, ``0``...)."""

    name = "boolean"
    default_message = "boolean validation failed"

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if isinstance(value, bool):
            return
        if isinstance(value, int) and value in (0, 1):
            context.mutate(bool(value))
            return
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in _TRUE_VALUES:
                context.mutate(True)
                return
            if lowered in _FALSE_VALUES:
                context.mutate(False)
                return
        self.fail(context, compiled_options)


class DateRule(Rule):
    """
    Accept ``date``/``datetime`` instances or strings in a known format.

    Options:
        format: ``strptime`` format; ISO 8601 is used when omitted
    """

    name = "date"
    default_message = "the input must be a date"

    def prepare_options(self, subtype: str, options: RuleOptions) -> RuleOptions:
        date_format = options.get("format")
        if date_format is not None and not isinstance(date_format, str):
            raise RuleOptionsError(self.name, "'format' must be a string")
        return options

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if isinstance(value, (date, datetime)):
            return
        if isinstance(value, str):
            date_format = compiled_options.get("format")
            try:
                if date_format:
                    parsed = datetime.strptime(value, date_format)
                else:
                    parsed = datetime.fromisoformat(value)
            except ValueError:
                self.fail(context, compiled_options, {"format": date_format})
                return
            context.mutate(parsed)
            return
        self.fail(context, compiled_options, {"format": compiled_options.get("format")})


class ObjectRule(Rule):
    name = "object"
    default_message = "object validation failed"

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if not is_plain_object(value):
            self.fail(context, compiled_options)


class ArrayRule(Rule):
    name = "array"
    default_message = "array validation failed"

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if not is_array_like(value):
            self.fail(context, compiled_options)


PRIMITIVE_RULES = {
    "string": StringRule(),
    "number": NumberRule(),
    "boolean": BooleanRule(),
    "date": DateRule(),
    "object": ObjectRule(),
    "array": ArrayRule(),
}
