"""
Node compilers, one per schema node kind.
"""

from valtree.compiler.nodes.array import ArrayCompiler
from valtree.compiler.nodes.literal import LiteralCompiler
from valtree.compiler.nodes.object import ObjectCompiler

__all__ = ["ArrayCompiler", "LiteralCompiler", "ObjectCompiler"]
