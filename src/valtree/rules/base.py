"""
Rule contract for valtree.

A rule is a stateless, shared unit with two phases. The compile phase runs
once per schema while the compiler resolves a node's rule references and
returns ``RuleMeta``: the rule name, whether its run-time phase must be
awaited, whether it wants to see absent values and its prepared options. The
run-time phase receives the field value, the prepared options and the field
context, and reports at most one violation through the context.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from attrs import field, frozen

from valtree.core.types import RuleOptions
from valtree.exceptions import RuleOptionsError

if TYPE_CHECKING:
    from valtree.compiler.runtime import FieldContext


@frozen
class RuleMeta:
    """Compile-time metadata of a rule attached to one node."""

    name: str
    is_async: bool = False
    allow_undefined: bool = False
    compiled_options: RuleOptions = field(factory=dict)


@runtime_checkable
class RuleLike(Protocol):
    """Structural contract accepted by the rule catalog."""

    def compile(self, subtype: str, options: RuleOptions) -> RuleMeta: ...

    def validate(
        self, value: Any, compiled_options: RuleOptions, context: "FieldContext"
    ) -> Any: ...


class Rule(ABC):
    """
    Base class for synchronous rules.

    Subclasses set ``name`` and ``default_message`` and implement
    ``validate``. Options are checked and prepared by ``prepare_options``,
    which should raise ``RuleOptionsError`` for anything it cannot accept.
    """

    name: str = ""
    default_message: str = ""
    is_async: bool = False
    allow_undefined: bool = False
    subtypes: frozenset[str] | None = None

    def compile(self, subtype: str, options: RuleOptions) -> RuleMeta:
        """
        Run the compile phase for one node.

        Params:
            subtype: Literal subtype of the node ("string", "array", "object", ...)
            options: Options from the schema's rule reference

        Returns:
            RuleMeta describing how the compiler must invoke this rule

        Raises:
            RuleOptionsError: When the rule cannot be attached as requested
        """
        if self.subtypes is not None and subtype not in self.subtypes:
            raise RuleOptionsError(
                self.name,
                f"cannot be used on '{subtype}' fields "
                f"(supported: {', '.join(sorted(self.subtypes))})",
            )
        return RuleMeta(
            name=self.name,
            is_async=self.is_async,
            allow_undefined=self.allow_undefined,
            compiled_options=self.prepare_options(subtype, dict(options)),
        )

    def prepare_options(self, subtype: str, options: RuleOptions) -> RuleOptions:
        """Check and normalise options; returns them unchanged by default."""
        return options

    def fail(
        self,
        context: "FieldContext",
        options: RuleOptions | None = None,
        args: dict[str, Any] | None = None,
    ) -> None:
        """Report this rule's violation, honouring a ``message`` option."""
        message = (options or {}).get("message") or self.default_message
        context.report(self.name, message, args)

    @abstractmethod
    def validate(
        self, value: Any, compiled_options: RuleOptions, context: "FieldContext"
    ) -> None:
        """Check ``value`` and report through ``context`` when it fails."""
        raise NotImplementedError


class AsyncRule(Rule):
    """Base class for rules whose run-time phase has to be awaited."""

    is_async = True

    @abstractmethod
    async def validate(
        self, value: Any, compiled_options: RuleOptions, context: "FieldContext"
    ) -> None:
        raise NotImplementedError
