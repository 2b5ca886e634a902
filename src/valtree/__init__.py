"""
valtree - compile schema trees into fast, reusable validation procedures

valtree turns a tree of literal, object and array nodes into a single Python
function once, then runs that function against any number of inputs,
collecting precise per-field violations.
"""

from importlib.metadata import version

from valtree.compiler import CompiledSchema, Compiler
from valtree.config import ValidatorConfig
from valtree.core import ArrayNode, LiteralNode, ObjectNode, RuleRef, load_schema, rule
from valtree.reporters import ApiErrorReporter, VanillaErrorReporter
from valtree.rules import AsyncRule, Rule, RuleCatalog, default_catalog
from valtree.validator import Validator, validate, validate_async

__version__ = version("valtree")

__all__ = [
    "__version__",
    "ArrayNode",
    "LiteralNode",
    "ObjectNode",
    "RuleRef",
    "load_schema",
    "rule",
    "Compiler",
    "CompiledSchema",
    "Rule",
    "AsyncRule",
    "RuleCatalog",
    "default_catalog",
    "ApiErrorReporter",
    "VanillaErrorReporter",
    "Validator",
    "ValidatorConfig",
    "validate",
    "validate_async",
]
