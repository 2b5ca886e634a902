"""
Line buffer the node compilers write the validation procedure into.
"""

from valtree.exceptions import BufferIndentationError

INDENT = "    "


class CompilerBuffer:
    """
    Ordered, indentation aware collection of generated source lines.

    A buffer belongs to exactly one compile pass. Blocks opened with
    ``indent`` that receive no line before the matching ``dedent`` are closed
    with ``pass`` so the rendered source is always valid Python.
    """

    def __init__(self, level: int = 0):
        self.lines: list[str] = []
        self.level = level
        self._block_sizes: list[int] = []

    def write_statement(self, statement: str) -> None:
        """Append a statement at the current indentation."""
        self.lines.append(f"{INDENT * self.level}{statement}")
        if self._block_sizes:
            self._block_sizes[-1] += 1

    def write_expression(self, expression: str) -> None:
        """Append an expression statement (a call, an assignment...)."""
        self.write_statement(expression)

    def indent(self) -> None:
        self.level += 1
        self._block_sizes.append(0)

    def dedent(self) -> None:
        """
        Close the innermost block.

        Raises:
            BufferIndentationError: When no block is open
        """
        if self.level - 1 < 0:
            raise BufferIndentationError(self.level - 1)
        if self._block_sizes and self._block_sizes.pop() == 0:
            self.lines.append(f"{INDENT * self.level}pass")
        self.level -= 1

    def new_line(self) -> None:
        self.lines.append("")

    def render(self) -> str:
        return "\n".join(self.lines) + "\n"

    def __len__(self) -> int:
        return sum(1 for line in self.lines if line)
