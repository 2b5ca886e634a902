"""
valtree exception classes.

This package provides all exception types used throughout valtree for
consistent error handling and reporting.
"""

from valtree.exceptions.core import (
    AsyncSchemaError,
    BufferIndentationError,
    ErrorContext,
    MalformedNodeError,
    MessageTemplateError,
    RuleConflictError,
    RuleOptionsError,
    SchemaCompileError,
    UnknownRuleError,
    ValidationException,
    ValtreeError,
)

__all__ = [
    "ValtreeError",
    "ErrorContext",
    "SchemaCompileError",
    "UnknownRuleError",
    "MalformedNodeError",
    "RuleOptionsError",
    "BufferIndentationError",
    "RuleConflictError",
    "MessageTemplateError",
    "AsyncSchemaError",
    "ValidationException",
]
