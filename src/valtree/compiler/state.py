"""
Compile-pass state shared by the node compilers.

A ``CompilerState`` is created when a compile pass starts and dropped once
the procedure has been loaded. It hands out the unique variable names the
generated code uses and collects the objects the procedure's namespace must
bind.
"""

from dataclasses import dataclass, field
from typing import Any

from valtree.compiler.buffer import CompilerBuffer
from valtree.core.path_utils import FieldPointer
from valtree.rules.base import RuleLike, RuleMeta


@dataclass(frozen=True)
class ResolvedRule:
    """A rule reference after the catalog lookup and the rule's compile phase."""

    meta: RuleMeta
    rule: RuleLike

    @property
    def name(self) -> str:
        return self.meta.name

    @property
    def is_async(self) -> bool:
        return self.meta.is_async

    @property
    def allow_undefined(self) -> bool:
        return self.meta.allow_undefined


@dataclass(frozen=True)
class Destination:
    """
    Where a validated value is written in the output.

    ``key`` set: item assignment into a dict. ``append`` set: appended to a
    list. Neither: plain assignment to the variable (the procedure result).
    """

    variable: str
    key: str | None = None
    append: bool = False

    def assignment(self, expression: str) -> str:
        if self.append:
            return f"{self.variable}.append({expression})"
        if self.key is None:
            return f"{self.variable} = {expression}"
        return f"{self.variable}[{self.key!r}] = {expression}"


@dataclass(frozen=True)
class FieldRef:
    """Everything a node compiler needs to know about the field it compiles."""

    pointer: FieldPointer
    parent_variable: str | None
    destination: Destination


@dataclass
class CompilerState:
    """Counters, bindings and buffer of one compile pass."""

    buffer: CompilerBuffer
    index_counter: int = 0
    out_counter: int = 0
    value_counter: int = 0
    rule_counter: int = 0
    bindings: dict[str, Any] = field(default_factory=dict)
    resolved: dict[int, list[ResolvedRule]] = field(default_factory=dict)
    async_rules: list[str] = field(default_factory=list)

    def next_index_variable(self) -> str:
        name = f"index_{self.index_counter}"
        self.index_counter += 1
        return name

    def next_out_variable(self) -> str:
        name = f"out_{self.out_counter}"
        self.out_counter += 1
        return name

    def next_value_variable(self) -> tuple[str, str]:
        """Return a fresh value variable and its matching context variable."""
        number = self.value_counter
        self.value_counter += 1
        return f"val_{number}", f"ctx_{number}"

    def bind_rule(self, resolved: ResolvedRule) -> tuple[str, str]:
        """
        Bind a rule's validate callable and prepared options into the namespace.

        Returns:
            Names of the callable and of the options in generated code
        """
        number = self.rule_counter
        self.rule_counter += 1
        validate_name = f"validate_{number}"
        options_name = f"options_{number}"
        self.bindings[validate_name] = resolved.rule.validate
        self.bindings[options_name] = resolved.meta.compiled_options
        return validate_name, options_name

    def rules_for(self, node: Any) -> list[ResolvedRule]:
        return self.resolved.get(id(node), [])
