"""
Error reporter contract.

A reporter is created per validation call. Compiled procedures hand it every
violation through ``report``; once the call returns, ``has_errors`` and
``violations`` tell the caller what went wrong, in input order.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from attrs import frozen

from valtree.exceptions import ValidationException
from valtree.reporters.messages import MessagesBag, MessageTemplate


@frozen
class Violation:
    """One failed rule for one field."""

    pointer: str
    rule: str
    message: str
    array_expression_pointer: str | None = None
    args: dict[str, Any] | None = None


class ErrorReporter(ABC):
    """
    Base class collecting violations.

    With ``bail`` set, the first report raises ``ValidationException`` right
    away and aborts the validation call.
    """

    def __init__(
        self,
        messages: MessagesBag | Mapping[str, MessageTemplate] | None = None,
        bail: bool = False,
    ):
        self.messages = messages if isinstance(messages, MessagesBag) else MessagesBag(messages)
        self.bail = bail
        self.violations: list[Violation] = []

    @property
    def has_errors(self) -> bool:
        return bool(self.violations)

    def report(
        self,
        pointer: str,
        rule: str,
        message: str,
        array_expression_pointer: str | None = None,
        args: dict[str, Any] | None = None,
    ) -> None:
        """
        Record a violation.

        Params:
            pointer: Concrete pointer of the field (``items.1.name``)
            rule: Name of the failed rule
            message: Default or rule-overridden message
            array_expression_pointer: Wildcard pointer, inside arrays only
            args: Values the rule wants exposed to message templates

        Raises:
            ValidationException: In bail mode
        """
        resolved = self.messages.get(pointer, rule, message, array_expression_pointer, args)
        self.violations.append(
            Violation(
                pointer=pointer,
                rule=rule,
                message=resolved,
                array_expression_pointer=array_expression_pointer,
                args=args,
            )
        )
        if self.bail:
            raise self.to_error()

    @abstractmethod
    def to_json(self) -> Any:
        """Serialise the collected violations."""
        raise NotImplementedError

    def to_error(self) -> ValidationException:
        return ValidationException(self.to_json())

    def __len__(self) -> int:
        return len(self.violations)
