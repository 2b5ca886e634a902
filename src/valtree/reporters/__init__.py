"""
valtree error reporters.

This package provides the reporter contract compiled procedures report
violations to, the custom messages lookup and the built-in reporters.
"""

from valtree.reporters.base import ErrorReporter, Violation
from valtree.reporters.messages import MessagesBag, MessageTemplate
from valtree.reporters.vanilla import ApiErrorReporter, VanillaErrorReporter

__all__ = [
    "ErrorReporter",
    "Violation",
    "MessagesBag",
    "MessageTemplate",
    "ApiErrorReporter",
    "VanillaErrorReporter",
]
