"""
Compiles an array node: its own rules, then a loop over the members when an
element schema is declared.
"""

from typing import TYPE_CHECKING

from valtree.compiler.nodes.literal import LiteralCompiler
from valtree.compiler.state import CompilerState, Destination, FieldRef
from valtree.core.nodes import ArrayNode, LiteralNode, ObjectNode
from valtree.core.path_utils import MISSING_NAME

if TYPE_CHECKING:
    from valtree.compiler.compiler import Compiler


class ArrayCompiler:
    """
    Emits the statements validating a list.

    The array's own rules (``array``, length bounds...) run through the
    literal compiler with the ``array`` subtype. Without an element schema the
    list is written to the output as it is. With one, the container level
    output is disabled: the list is walked inside a guard checking that it
    exists and is list-shaped, and a fresh output list receives each member
    that validates, in input order.
    """

    def __init__(
        self,
        field: FieldRef,
        node: ArrayNode,
        compiler: "Compiler",
        state: CompilerState,
    ):
        self.field = field
        self.node = node
        self.compiler = compiler
        self.state = state

    def declare_out_variable(self, out_variable: str) -> None:
        """Start the output as an empty list, filled as members validate."""
        self.state.buffer.write_expression(f"{out_variable} = []")
        self.state.buffer.write_expression(
            self.field.destination.assignment(out_variable)
        )

    def start_if_guard(self, variable_name: str) -> None:
        """Only walk the members of a value that is actually a list."""
        self.state.buffer.write_statement(
            f"if {variable_name} is not {MISSING_NAME} and helpers.is_array({variable_name}):"
        )
        self.state.buffer.indent()

    def end_if_guard(self) -> None:
        self.state.buffer.dedent()

    def start_for_loop(self, variable_name: str, index_variable: str) -> str:
        self.state.buffer.write_statement(
            f"for {index_variable} in range(len({variable_name})):"
        )
        self.state.buffer.indent()
        return variable_name

    def start_async_for_loop(self, variable_name: str, index_variable: str) -> str:
        """
        Walk a snapshot of the list, one member at a time.

        Members are awaited in turn, so the snapshot keeps indices stable if
        the input list changes while a rule is suspended.
        """
        snapshot = index_variable.replace("index_", "members_")
        self.state.buffer.write_expression(f"{snapshot} = list({variable_name})")
        self.state.buffer.write_statement(f"for {index_variable} in range(len({snapshot})):")
        self.state.buffer.indent()
        return snapshot

    def end_for_loop(self) -> None:
        self.state.buffer.dedent()

    def has_async_children(self, node: LiteralNode | ObjectNode | ArrayNode) -> bool:
        """Tell whether any rule of ``node`` or below it is asynchronous."""
        if any(rule.is_async for rule in self.state.rules_for(node)):
            return True

        if isinstance(node, ArrayNode) and node.each is not None:
            return self.has_async_children(node.each)

        if isinstance(node, ObjectNode):
            return any(self.has_async_children(child) for child in node.children.values())

        return False

    def compile(self) -> None:
        rules = self.state.rules_for(self.node)
        if not rules and self.node.each is None:
            return

        literal = LiteralCompiler(self.field, "array", rules, self.state)
        literal.disable_output = self.node.each is not None
        literal.force_value_declaration = True
        literal.compile()

        if self.node.each is None:
            return

        has_async_children = self.has_async_children(self.node.each)

        self.state.buffer.new_line()
        self.start_if_guard(literal.variable_name)

        index_variable = self.state.next_index_variable()
        out_variable = self.state.next_out_variable()
        self.declare_out_variable(out_variable)

        if has_async_children:
            members = self.start_async_for_loop(literal.variable_name, index_variable)
        else:
            members = self.start_for_loop(literal.variable_name, index_variable)

        self.compiler.compile_node(
            self.node.each,
            FieldRef(
                pointer=self.field.pointer.element(index_variable),
                parent_variable=members,
                destination=Destination(out_variable, append=True),
            ),
            self.state,
        )

        self.end_for_loop()
        self.end_if_guard()
