"""
Reporters shipped with valtree.
"""

from typing import Any

from valtree.reporters.base import ErrorReporter


class VanillaErrorReporter(ErrorReporter):
    """Groups messages by field: ``{"items.1.name": ["required validation failed"]}``."""

    def to_json(self) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}
        for violation in self.violations:
            errors.setdefault(violation.pointer, []).append(violation.message)
        return errors


class ApiErrorReporter(ErrorReporter):
    """
    Lists violations in order, suited to API responses::

        {"errors": [{"field": "a", "rule": "string", "message": "..."}]}
    """

    def to_json(self) -> dict[str, list[dict[str, Any]]]:
        errors = []
        for violation in self.violations:
            entry: dict[str, Any] = {
                "field": violation.pointer,
                "rule": violation.rule,
                "message": violation.message,
            }
            if violation.args:
                entry["args"] = violation.args
            errors.append(entry)
        return {"errors": errors}
