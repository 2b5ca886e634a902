"""
valtree schema compiler.

This package turns a schema tree into a reusable validation procedure: the
line buffer, the per-pass state, the node compilers and the run-time helpers
generated code relies on.
"""

from valtree.compiler.buffer import CompilerBuffer
from valtree.compiler.compiler import Compiler
from valtree.compiler.procedure import CompiledSchema
from valtree.compiler.runtime import DEFAULT_HELPERS, FieldContext, RuntimeHelpers
from valtree.compiler.state import CompilerState, Destination, FieldRef, ResolvedRule

__all__ = [
    "Compiler",
    "CompiledSchema",
    "CompilerBuffer",
    "CompilerState",
    "Destination",
    "FieldRef",
    "ResolvedRule",
    "FieldContext",
    "RuntimeHelpers",
    "DEFAULT_HELPERS",
]
