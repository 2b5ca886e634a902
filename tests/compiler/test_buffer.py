"""
Tests for the compiler line buffer.
"""

import pytest

from valtree.compiler.buffer import CompilerBuffer
from valtree.exceptions import BufferIndentationError, SchemaCompileError


class TestCompilerBuffer:
    """Test writing, indenting and rendering generated lines."""

    def test_statements_follow_indentation(self):
        buffer = CompilerBuffer()
        buffer.write_statement("if x:")
        buffer.indent()
        buffer.write_expression("y = 1")
        buffer.dedent()
        buffer.write_expression("z = 2")

        assert buffer.render() == "if x:\n    y = 1\nz = 2\n"

    def test_initial_level(self):
        buffer = CompilerBuffer(level=1)
        buffer.write_expression("a = 1")
        assert buffer.render() == "    a = 1\n"

    def test_empty_block_gets_pass(self):
        """Test that a block closed without content stays valid Python."""
        buffer = CompilerBuffer()
        buffer.write_statement("for i in range(3):")
        buffer.indent()
        buffer.dedent()

        assert buffer.render() == "for i in range(3):\n    pass\n"
        compile(buffer.render(), "<test>", "exec")

    def test_nested_block_counts_as_content(self):
        buffer = CompilerBuffer()
        buffer.write_statement("if a:")
        buffer.indent()
        buffer.write_statement("if b:")
        buffer.indent()
        buffer.dedent()
        buffer.dedent()

        assert buffer.render() == "if a:\n    if b:\n        pass\n"

    def test_new_line_is_cosmetic(self):
        buffer = CompilerBuffer()
        buffer.write_statement("if a:")
        buffer.indent()
        buffer.new_line()
        buffer.dedent()

        # a blank line is not a statement, the block still needs a body
        assert buffer.render() == "if a:\n\n    pass\n"
        assert len(buffer) == 2

    def test_dedent_below_zero(self):
        buffer = CompilerBuffer()
        with pytest.raises(BufferIndentationError) as exc_info:
            buffer.dedent()
        assert exc_info.value.level == -1
        assert isinstance(exc_info.value, SchemaCompileError)
