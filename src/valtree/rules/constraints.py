"""
Built-in constraint rules.

Constraints narrow an already typed value: presence, membership, length,
numeric range and textual patterns. Their options are checked once, in the
compile phase, so a schema with a bad option never compiles.
"""

import re
from abc import abstractmethod
from typing import Any

from valtree.core.types import MISSING, RuleOptions
from valtree.exceptions import RuleOptionsError
from valtree.rules.base import Rule

EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)


class RequiredRule(Rule):
    """Fail on absent values, ``None`` and empty strings."""

    name = "required"
    default_message = "required validation failed"

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if value is MISSING or value is None or value == "":
            self.fail(context, compiled_options)


class OptionalRule(Rule):
    """
    Mark a field as optional.

    The rule tolerates absent values and never reports. Its presence makes
    the compiler skip the field's other rules when the value is absent.
    """

    name = "optional"
    allow_undefined = True

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        return None


class EnumRule(Rule):
    """
    Only accept one of the configured choices.

    Options:
        choices: Non-empty sequence of accepted values
    """

    name = "enum"
    default_message = "enum validation failed"

    def prepare_options(self, subtype: str, options: RuleOptions) -> RuleOptions:
        choices = options.get("choices")
        if isinstance(choices, (str, bytes)) or not choices:
            raise RuleOptionsError(self.name, "'choices' must be a non-empty sequence")
        try:
            options["choices"] = tuple(choices)
        except TypeError:
            raise RuleOptionsError(self.name, "'choices' must be a non-empty sequence") from None
        return options

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        choices = compiled_options["choices"]
        if value not in choices:
            self.fail(context, compiled_options, {"choices": list(choices)})


class _LengthRule(Rule):
    subtypes = frozenset({"string", "array"})
    option_name = ""

    def prepare_options(self, subtype: str, options: RuleOptions) -> RuleOptions:
        length = options.get(self.option_name)
        if isinstance(length, bool) or not isinstance(length, int) or length < 0:
            raise RuleOptionsError(
                self.name, f"'{self.option_name}' must be a non-negative integer"
            )
        return options

    @abstractmethod
    def accepts(self, length: int, limit: int) -> bool:
        raise NotImplementedError

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        # type rules report wrong types, only sized values are measured
        if not isinstance(value, (str, list, tuple)):
            return
        limit = compiled_options[self.option_name]
        if not self.accepts(len(value), limit):
            self.fail(context, compiled_options, {self.option_name: limit})


class MinLengthRule(_LengthRule):
    name = "minLength"
    default_message = "minLength validation failed"
    option_name = "min_length"

    def accepts(self, length: int, limit: int) -> bool:
        return length >= limit


class MaxLengthRule(_LengthRule):
    name = "maxLength"
    default_message = "maxLength validation failed"
    option_name = "max_length"

    def accepts(self, length: int, limit: int) -> bool:
        return length <= limit


class RangeRule(Rule):
    """
    Accept numbers between ``start`` and ``stop``, both inclusive.

    Options:
        start: Lower bound
        stop: Upper bound, not lower than ``start``
    """

    name = "range"
    default_message = "range validation failed"
    subtypes = frozenset({"number"})

    def prepare_options(self, subtype: str, options: RuleOptions) -> RuleOptions:
        start, stop = options.get("start"), options.get("stop")
        for key, bound in (("start", start), ("stop", stop)):
            if isinstance(bound, bool) or not isinstance(bound, (int, float)):
                raise RuleOptionsError(self.name, f"'{key}' must be a number")
        if start > stop:
            raise RuleOptionsError(self.name, "'start' must not be greater than 'stop'")
        return options

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return
        start, stop = compiled_options["start"], compiled_options["stop"]
        if value < start or value > stop:
            self.fail(context, compiled_options, {"start": start, "stop": stop})


class RegexRule(Rule):
    """
    Accept strings matching a pattern.

    Options:
        pattern: Regular expression source or a compiled pattern
    """

    name = "regex"
    default_message = "regex validation failed"
    subtypes = frozenset({"string"})

    def prepare_options(self, subtype: str, options: RuleOptions) -> RuleOptions:
        pattern = options.get("pattern")
        if isinstance(pattern, re.Pattern):
            return options
        if not isinstance(pattern, str):
            raise RuleOptionsError(self.name, "'pattern' must be a string")
        try:
            options["pattern"] = re.compile(pattern)
        except re.error as e:
            raise RuleOptionsError(self.name, f"invalid pattern: {e}") from e
        return options

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if not isinstance(value, str):
            return
        if compiled_options["pattern"].search(value) is None:
            self.fail(context, compiled_options)


class EmailRule(Rule):
    name = "email"
    default_message = "email validation failed"
    subtypes = frozenset({"string"})

    def validate(self, value: Any, compiled_options: RuleOptions, context) -> None:
        if not isinstance(value, str):
            return
        if EMAIL_PATTERN.match(value) is None:
            self.fail(context, compiled_options)


CONSTRAINT_RULES = {
    "required": RequiredRule(),
    "optional": OptionalRule(),
    "enum": EnumRule(),
    "minLength": MinLengthRule(),
    "maxLength": MaxLengthRule(),
    "range": RangeRule(),
    "regex": RegexRule(),
    "email": EmailRule(),
}
