"""
Core valtree components.

This package provides the schema node models, field pointers and shared type
definitions the compiler and the rules build on.
"""

from valtree.core.nodes import (
    ArrayNode,
    LiteralNode,
    ObjectNode,
    RuleRef,
    SchemaNode,
    load_schema,
    rule,
)
from valtree.core.path_utils import (
    FieldPointer,
    PointerResolver,
    PointerSegment,
    ResolvedPointer,
)
from valtree.core.types import MISSING, Output, RuleOptions

__all__ = [
    "ArrayNode",
    "LiteralNode",
    "ObjectNode",
    "RuleRef",
    "SchemaNode",
    "load_schema",
    "rule",
    "FieldPointer",
    "PointerResolver",
    "PointerSegment",
    "ResolvedPointer",
    "MISSING",
    "Output",
    "RuleOptions",
]
