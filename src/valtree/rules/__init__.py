"""
valtree rules.

This package provides the rule contract, the catalog the compiler resolves
rule references against and the built-in rules.
"""

from valtree.rules.base import AsyncRule, Rule, RuleLike, RuleMeta
from valtree.rules.constraints import CONSTRAINT_RULES
from valtree.rules.primitives import PRIMITIVE_RULES, is_array_like, is_plain_object
from valtree.rules.registry import RuleCatalog, default_catalog

__all__ = [
    "Rule",
    "AsyncRule",
    "RuleLike",
    "RuleMeta",
    "RuleCatalog",
    "default_catalog",
    "PRIMITIVE_RULES",
    "CONSTRAINT_RULES",
    "is_plain_object",
    "is_array_like",
]
