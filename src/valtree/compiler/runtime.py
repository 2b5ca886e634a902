"""
Run-time support for compiled validation procedures.

Compiled procedures only hold local variables; everything they need besides
the resolved rules comes through a ``RuntimeHelpers`` instance: the presence
and shape predicates and the factory for per-field contexts.
"""

from typing import Any

from valtree.core.types import MISSING
from valtree.rules.primitives import is_array_like, is_plain_object


class FieldContext:
    """
    State of one field during one validation call.

    Rules read ``root``/``tip`` for cross-field checks, report through
    ``report`` and may replace the value with ``mutate``. ``failed`` tells
    the procedure whether the value may be written to the output.
    """

    __slots__ = (
        "value",
        "root",
        "tip",
        "pointer",
        "array_expression_pointer",
        "error_reporter",
        "failed",
    )

    def __init__(
        self,
        value: Any,
        root: Any,
        tip: Any,
        pointer: str,
        array_expression_pointer: str | None,
        error_reporter: Any,
    ):
        self.value = value
        self.root = root
        self.tip = tip
        self.pointer = pointer
        self.array_expression_pointer = array_expression_pointer
        self.error_reporter = error_reporter
        self.failed = False

    def report(self, rule: str, message: str, args: dict[str, Any] | None = None) -> None:
        """Record a violation of ``rule`` for this field."""
        self.failed = True
        self.error_reporter.report(
            self.pointer, rule, message, self.array_expression_pointer, args
        )

    def mutate(self, value: Any) -> None:
        """Replace the value seen by the remaining rules and the output."""
        self.value = value

    @property
    def exists(self) -> bool:
        return self.value is not MISSING

    def __repr__(self) -> str:
        return f"FieldContext(pointer={self.pointer!r}, value={self.value!r})"


class RuntimeHelpers:
    """Utilities referenced by generated code as ``helpers``."""

    MISSING = MISSING
    context = FieldContext

    @staticmethod
    def exists(value: Any) -> bool:
        return value is not MISSING

    @staticmethod
    def is_object(value: Any) -> bool:
        return is_plain_object(value)

    @staticmethod
    def is_array(value: Any) -> bool:
        return is_array_like(value)


DEFAULT_HELPERS = RuntimeHelpers()
