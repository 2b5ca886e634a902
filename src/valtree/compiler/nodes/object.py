"""
Compiles an object node: its own rules, a shape guard, then each child.
"""

from typing import TYPE_CHECKING

from valtree.compiler.nodes.literal import LiteralCompiler
from valtree.compiler.state import CompilerState, Destination, FieldRef
from valtree.core.nodes import ObjectNode
from valtree.core.path_utils import MISSING_NAME

if TYPE_CHECKING:
    from valtree.compiler.compiler import Compiler


class ObjectCompiler:
    """
    Emits the statements validating a keyed container.

    The node's rules (normally including ``object``) run as a literal check
    with output disabled. Children are only compiled inside a guard checking
    that the value exists and is a plain mapping; the guard creates the
    output dict, so only declared children ever reach the output.
    """

    def __init__(
        self,
        field: FieldRef,
        node: ObjectNode,
        compiler: "Compiler",
        state: CompilerState,
    ):
        self.field = field
        self.node = node
        self.compiler = compiler
        self.state = state

    def start_if_guard(self, variable_name: str) -> None:
        self.state.buffer.write_statement(
            f"if {variable_name} is not {MISSING_NAME} and helpers.is_object({variable_name}):"
        )
        self.state.buffer.indent()

    def end_if_guard(self) -> None:
        self.state.buffer.dedent()

    def declare_out_variable(self) -> str:
        out_variable = self.state.next_out_variable()
        self.state.buffer.write_expression(f"{out_variable} = {{}}")
        self.state.buffer.write_expression(
            self.field.destination.assignment(out_variable)
        )
        return out_variable

    def compile(self) -> None:
        rules = self.state.rules_for(self.node)
        if not rules and not self.node.children:
            return

        literal = LiteralCompiler(self.field, "object", rules, self.state)
        literal.disable_output = True
        literal.force_value_declaration = True
        literal.compile()

        self.state.buffer.new_line()
        self.start_if_guard(literal.variable_name)
        out_variable = self.declare_out_variable()

        for name, child in self.node.children.items():
            self.compiler.compile_node(
                child,
                FieldRef(
                    pointer=self.field.pointer.child(name),
                    parent_variable=literal.variable_name,
                    destination=Destination(out_variable, key=name),
                ),
                self.state,
            )

        self.end_if_guard()
