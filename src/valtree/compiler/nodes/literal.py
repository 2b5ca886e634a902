"""
Compiles a literal node to a guarded chain of rule calls.
"""

from valtree.compiler.state import CompilerState, FieldRef, ResolvedRule
from valtree.core.path_utils import MISSING_NAME, PointerResolver


class LiteralCompiler:
    """
    Emits the statements validating one scalar field.

    The generated code binds the field value, builds its ``FieldContext`` and
    calls each rule in declared order. When one of the rules is flagged
    ``allow_undefined``, the field is optional: the flagged rules always run
    and runs of the other rules are wrapped in an existence guard so that an
    absent value skips them. Without such a rule every rule sees ``MISSING``
    and reports the absence itself. When every rule passed and the value is
    present, it is written to the destination.

    The object and array compilers reuse this class for their container level
    checks, turning ``disable_output`` and ``force_value_declaration`` on.
    """

    def __init__(
        self,
        field: FieldRef,
        subtype: str,
        rules: list[ResolvedRule],
        state: CompilerState,
    ):
        self.field = field
        self.subtype = subtype
        self.rules = rules
        self.state = state
        self.disable_output = False
        self.force_value_declaration = False
        self.variable_name: str | None = None
        self.context_name: str | None = None

    def declare_value_variable(self) -> None:
        """Bind the value at this field's location to a fresh local."""
        if self.variable_name is not None:
            return
        self.variable_name, self.context_name = self.state.next_value_variable()
        expression = PointerResolver.value_expression(
            self.field.pointer, self.field.parent_variable
        )
        self.state.buffer.write_expression(f"{self.variable_name} = {expression}")

    def declare_context(self) -> None:
        resolved = PointerResolver.resolve(self.field.pointer, self.field.parent_variable)
        tip = self.field.parent_variable or "None"
        self.state.buffer.write_expression(
            f"{self.context_name} = helpers.context({self.variable_name}, root, {tip}, "
            f"{resolved.pointer_expression}, {resolved.array_expression_pointer!r}, error_reporter)"
        )

    def compile_rule_call(self, rule: ResolvedRule) -> None:
        validate_name, options_name = self.state.bind_rule(rule)
        call = f"{validate_name}({self.context_name}.value, {options_name}, {self.context_name})"
        if rule.is_async:
            call = f"await {call}"
        self.state.buffer.write_expression(call)

    def compile_rules(self) -> None:
        buffer = self.state.buffer
        tolerates_absence = any(rule.allow_undefined for rule in self.rules)
        guarded = False
        for rule in self.rules:
            if rule.allow_undefined and guarded:
                buffer.dedent()
                guarded = False
            elif tolerates_absence and not rule.allow_undefined and not guarded:
                buffer.write_statement(f"if {self.context_name}.value is not {MISSING_NAME}:")
                buffer.indent()
                guarded = True
            self.compile_rule_call(rule)
        if guarded:
            buffer.dedent()
        buffer.write_expression(f"{self.variable_name} = {self.context_name}.value")

    def compile_output(self) -> None:
        buffer = self.state.buffer
        buffer.write_statement(
            f"if not {self.context_name}.failed and {self.variable_name} is not {MISSING_NAME}:"
        )
        buffer.indent()
        buffer.write_expression(self.field.destination.assignment(self.variable_name))
        buffer.dedent()

    def compile(self) -> None:
        """Write the field's statements to the buffer."""
        if not self.rules and not self.force_value_declaration:
            return

        self.state.buffer.new_line()
        self.declare_value_variable()
        if not self.rules:
            return

        self.declare_context()
        self.compile_rules()
        if not self.disable_output:
            self.compile_output()
