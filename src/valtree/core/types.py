"""
Core type definitions for valtree.

This module contains fundamental type aliases and the sentinel used to tell
an absent field apart from a field explicitly set to ``None``.
"""

from typing import Any, Final


class _Missing:
    """Marker for a value that is absent from its container."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict) -> "_Missing":
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()

RuleOptions = dict[str, Any]

Output = dict[str, Any] | list[Any] | Any

NodeKind = str  # "literal", "object" or "array"
