"""
Exception classes for valtree schema compilation and validation.

This module defines specific exception types for the error conditions that
can occur while compiling a schema tree into a validation procedure and while
surfacing the violations a validation call collected.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ErrorContext:
    """
    Context information for compile-time error messages.

    Captures where in the schema tree a problem was found, so that an error
    raised deep inside a nested array of objects still names the offending
    field.

    Params:
        schema_path: Array expression pointer of the node (e.g. "items.*.name")
        node_type: Kind of the node being compiled ("literal", "object", "array")
        subtype: Literal subtype, when the node carries one
        rule_name: Name of the rule being resolved, when relevant
    """

    schema_path: str | None = None
    node_type: str | None = None
    subtype: str | None = None
    rule_name: str | None = None

    def format_location(self) -> str:
        """
        Format location information for an error message.

        Returns:
            Indented multi-line location description, empty when nothing is known
        """
        lines = []

        if self.schema_path is not None:
            lines.append(f"  at field '{self.schema_path or '<root>'}'")

        if self.node_type:
            if self.subtype:
                lines.append(f"  in {self.node_type} node ({self.subtype})")
            else:
                lines.append(f"  in {self.node_type} node")

        if self.rule_name:
            lines.append(f"  rule: {self.rule_name}")

        return "\n".join(lines)


def _with_context(message: str, context: ErrorContext | None) -> str:
    if context is None:
        return message
    location = context.format_location()
    return f"{message}\n{location}" if location else message


class ValtreeError(Exception):
    """Base exception for all valtree errors."""

    pass


class SchemaCompileError(ValtreeError):
    """Base exception for errors raised while compiling a schema tree."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        """
        Initialize the exception.

        Params:
            message: Description of the compile-time failure
            context: Optional location of the failure inside the schema tree
        """
        self.context = context
        super().__init__(_with_context(message, context))


class UnknownRuleError(SchemaCompileError):
    """Raised when a schema references a rule name missing from the catalog."""

    def __init__(
        self,
        rule_name: str,
        available: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        """
        Initialize the exception.

        Params:
            rule_name: The rule name that could not be resolved
            available: Names registered in the catalog, for the error message
            context: Optional location of the reference inside the schema tree
        """
        self.rule_name = rule_name
        self.available = available or []
        message = f"Unknown rule '{rule_name}'"
        if self.available:
            message += f". Available rules: {', '.join(sorted(self.available))}"
        super().__init__(message, context)


class MalformedNodeError(SchemaCompileError):
    """Raised when a schema node cannot be compiled as given."""

    def __init__(self, reason: str, context: ErrorContext | None = None):
        """
        Initialize the exception.

        Params:
            reason: Why the node is malformed
            context: Optional location of the node inside the schema tree
        """
        self.reason = reason
        super().__init__(f"Malformed schema node: {reason}", context)


class RuleOptionsError(SchemaCompileError):
    """Raised by a rule's compile phase when its options or target are invalid."""

    def __init__(
        self, rule_name: str, reason: str, context: ErrorContext | None = None
    ):
        """
        Initialize the exception.

        Params:
            rule_name: The rule that rejected its options
            reason: Why the options were rejected
            context: Optional location of the rule inside the schema tree
        """
        self.rule_name = rule_name
        self.reason = reason
        super().__init__(f"Invalid options for rule '{rule_name}': {reason}", context)


class BufferIndentationError(SchemaCompileError):
    """Raised when generated code is dedented below its outermost block."""

    def __init__(self, level: int):
        """
        Initialize the exception.

        Params:
            level: The indentation level the dedent would have produced
        """
        self.level = level
        super().__init__(f"Cannot dedent compiler buffer to level {level}")


class RuleConflictError(ValtreeError):
    """Raised when registering a rule under a name that is already taken."""

    def __init__(self, rule_name: str):
        """
        Initialize the exception.

        Params:
            rule_name: The name that is already registered
        """
        self.rule_name = rule_name
        super().__init__(f"Rule '{rule_name}' is already registered")


class MessageTemplateError(ValtreeError):
    """Raised when a custom message cannot be used as a template."""

    def __init__(self, key: str, reason: str):
        """
        Initialize the exception.

        Params:
            key: Lookup key of the offending message
            reason: Why the message was rejected
        """
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid custom message '{key}': {reason}")


class AsyncSchemaError(ValtreeError):
    """Raised when a schema with asynchronous rules is validated synchronously."""

    def __init__(self, rule_names: list[str] | None = None):
        """
        Initialize the exception.

        Params:
            rule_names: Names of the asynchronous rules found in the schema
        """
        self.rule_names = rule_names or []
        message = "Schema contains asynchronous rules, use validate_async()"
        if self.rule_names:
            message += f" (async rules: {', '.join(self.rule_names)})"
        super().__init__(message)


class ValidationException(ValtreeError):
    """Raised when a validation call collected one or more violations."""

    def __init__(self, messages: Any, status: int = 422):
        """
        Initialize the exception.

        Params:
            messages: Reporter specific serialisation of the violations
            status: Status code suited to surface the failure over HTTP
        """
        self.messages = messages
        self.status = status
        super().__init__("Validation failed")
