"""
Custom violation messages.

Messages are looked up from the most to the least specific key:

    1. ``<pointer>.<rule>``                  e.g. ``items.1.name.required``
    2. ``<array expression pointer>.<rule>`` e.g. ``items.*.name.required``
    3. ``<rule>``                            e.g. ``required``

and fall back to the message the rule reported. Custom messages are
``str.format`` templates receiving ``field``, ``rule`` and the rule's
arguments (``{min_length}``, ``{choices}``...), or callables returning the
final text.
"""

import string
from collections.abc import Callable, Mapping
from typing import Any

from valtree.exceptions import MessageTemplateError

MessageTemplate = str | Callable[[str, str, dict[str, Any]], str]


_formatter = string.Formatter()


class _KeepUnknown(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _check_template(key: str, template: Any) -> None:
    if callable(template):
        return
    if not isinstance(template, str):
        raise MessageTemplateError(key, "expected a string or a callable")
    try:
        parsed = list(_formatter.parse(template))
    except ValueError as e:
        raise MessageTemplateError(key, str(e)) from e
    for _, field_name, _, _ in parsed:
        if field_name is None:
            continue
        name = field_name.split(".", 1)[0].split("[", 1)[0]
        if not name or name.isdigit():
            raise MessageTemplateError(key, "positional fields are not supported")


class MessagesBag:
    """
    Resolves the message of each reported violation.

    Templates are checked when the bag is created, so a message that
    ``str.format`` could not render never reaches a validation call.

    Raises:
        MessageTemplateError: For positional fields, unbalanced braces or
            messages that are neither strings nor callables
    """

    def __init__(self, messages: Mapping[str, MessageTemplate] | None = None):
        self.messages = dict(messages or {})
        for key, template in self.messages.items():
            _check_template(key, template)

    def lookup_keys(
        self, pointer: str, rule: str, array_expression_pointer: str | None = None
    ) -> list[str]:
        keys = []
        if pointer:
            keys.append(f"{pointer}.{rule}")
        if array_expression_pointer:
            keys.append(f"{array_expression_pointer}.{rule}")
        keys.append(rule)
        return keys

    def get(
        self,
        pointer: str,
        rule: str,
        message: str,
        array_expression_pointer: str | None = None,
        args: dict[str, Any] | None = None,
    ) -> str:
        """
        Resolve the message for one violation.

        Params:
            pointer: Concrete pointer of the field
            rule: Name of the failed rule
            message: Message reported by the rule
            array_expression_pointer: Wildcard pointer, inside arrays only
            args: Arguments reported by the rule

        Returns:
            The custom message when one matches, ``message`` otherwise
        """
        for key in self.lookup_keys(pointer, rule, array_expression_pointer):
            if key in self.messages:
                template = self.messages[key]
                break
        else:
            return message

        if callable(template):
            return template(pointer, rule, dict(args or {}))
        return template.format_map(_KeepUnknown({**(args or {}), "field": pointer, "rule": rule}))

    def __bool__(self) -> bool:
        return bool(self.messages)
