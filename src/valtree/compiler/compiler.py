"""
Schema compiler.

Turns a schema tree into a ``CompiledSchema`` in one pass:

    1. Resolve every rule reference against the catalog and run each rule's
       compile phase, failing fast on unknown rules, bad options and cycles
    2. Decide whether the procedure has to be a coroutine function
    3. Dispatch each node to its node compiler, which write the procedure
       body into a ``CompilerBuffer``
    4. Load the rendered source with ``compile()``/``exec`` in a namespace
       binding only the resolved rules

Example of the generated code for an object with one string child::

    def validate(root, error_reporter, helpers):
        output = None

        val_0 = root
        ctx_0 = helpers.context(val_0, root, None, '', None, error_reporter)
        validate_0(ctx_0.value, options_0, ctx_0)
        val_0 = ctx_0.value

        if val_0 is not MISSING and helpers.is_object(val_0):
            out_0 = {}
            output = out_0

            val_1 = val_0.get('name', MISSING)
            ctx_1 = helpers.context(val_1, root, val_0, 'name', None, error_reporter)
            validate_1(ctx_1.value, options_1, ctx_1)
            val_1 = ctx_1.value
            if not ctx_1.failed and val_1 is not MISSING:
                out_0['name'] = val_1

        return output

Fields carrying an ``allow_undefined`` rule, such as ``optional``, also wrap
their other rule calls in ``if ctx_N.value is not MISSING:``.
"""

import keyword
import logging
from typing import Any

from valtree.compiler.buffer import CompilerBuffer
from valtree.compiler.nodes.array import ArrayCompiler
from valtree.compiler.nodes.literal import LiteralCompiler
from valtree.compiler.nodes.object import ObjectCompiler
from valtree.compiler.procedure import CompiledSchema
from valtree.compiler.state import CompilerState, Destination, FieldRef, ResolvedRule
from valtree.core.nodes import ArrayNode, LiteralNode, ObjectNode
from valtree.core.path_utils import MISSING_NAME, FieldPointer
from valtree.core.types import MISSING
from valtree.exceptions import (
    ErrorContext,
    MalformedNodeError,
    RuleOptionsError,
    SchemaCompileError,
    UnknownRuleError,
)
from valtree.rules.base import RuleMeta
from valtree.rules.registry import RuleCatalog, default_catalog

logger = logging.getLogger(__name__)

RESULT_VARIABLE = "output"


class Compiler:
    """
    Compiles schema trees against a rule catalog.

    The compiler itself keeps no per-schema state: each ``compile`` call
    creates its own ``CompilerState``, so one compiler may serve any number
    of independent compilations.
    """

    def __init__(self, catalog: RuleCatalog | None = None, debug_source: bool = False):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.debug_source = debug_source

    def compile(
        self, node: LiteralNode | ObjectNode | ArrayNode, name: str = "validate"
    ) -> CompiledSchema:
        """
        Compile a schema tree into a reusable validation procedure.

        Params:
            node: Root node of the schema
            name: Name of the generated function, shown in tracebacks

        Returns:
            The compiled procedure

        Raises:
            UnknownRuleError: When a rule reference names no registered rule
            RuleOptionsError: When a rule rejects its options or its node
            MalformedNodeError: When the tree holds a non-node or a cycle, or nests
                deeper than Python can compile
        """
        if not name.isidentifier() or keyword.iskeyword(name):
            raise ValueError(f"Procedure name must be an identifier, got {name!r}")

        state = CompilerState(buffer=CompilerBuffer(level=1))
        self.resolve_tree(node, FieldPointer(), state, set())
        is_async = bool(state.async_rules)

        state.buffer.write_expression(f"{RESULT_VARIABLE} = None")
        self.compile_node(
            node,
            FieldRef(
                pointer=FieldPointer(),
                parent_variable=None,
                destination=Destination(RESULT_VARIABLE),
            ),
            state,
        )
        state.buffer.new_line()
        state.buffer.write_statement(f"return {RESULT_VARIABLE}")

        header = f"{'async def' if is_async else 'def'} {name}(root, error_reporter, helpers):"
        source = f"{header}\n{state.buffer.render()}"

        namespace: dict[str, Any] = {MISSING_NAME: MISSING, **state.bindings}
        if name in namespace:
            raise ValueError(f"Procedure name {name!r} clashes with a generated name")
        try:
            code = compile(source, f"<valtree:{name}>", "exec")
        except SyntaxError as e:
            raise MalformedNodeError(
                f"generated procedure does not compile: {e.msg}",
                ErrorContext(schema_path="", node_type=node.type),
            ) from e
        exec(code, namespace)

        logger.debug(
            "Compiled %s schema into %d lines (async=%s, rules=%d)",
            node.type,
            len(state.buffer),
            is_async,
            state.rule_counter,
        )
        if self.debug_source:
            logger.debug("Generated source for %s:\n%s", name, source)

        return CompiledSchema(
            source=source,
            is_async=is_async,
            function=namespace[name],
            async_rules=tuple(dict.fromkeys(state.async_rules)),
        )

    def compile_node(
        self,
        node: LiteralNode | ObjectNode | ArrayNode,
        field: FieldRef,
        state: CompilerState,
    ) -> None:
        """Dispatch a node to the compiler of its kind."""
        if isinstance(node, ObjectNode):
            ObjectCompiler(field, node, self, state).compile()
        elif isinstance(node, ArrayNode):
            ArrayCompiler(field, node, self, state).compile()
        elif isinstance(node, LiteralNode):
            LiteralCompiler(field, node.subtype, state.rules_for(node), state).compile()
        else:
            raise MalformedNodeError(
                f"expected a literal, object or array node, got {type(node).__name__}",
                ErrorContext(schema_path=field.pointer.array_expression),
            )

    def resolve_tree(
        self,
        node: Any,
        pointer: FieldPointer,
        state: CompilerState,
        active: set[int],
    ) -> None:
        """
        Resolve the rules of ``node`` and of every node below it.

        Params:
            node: Node to resolve
            pointer: Pointer of the node, for error locations
            state: State of the current compile pass
            active: Ids of the nodes on the path from the root, to spot cycles

        Raises:
            MalformedNodeError: When ``node`` is not a node or closes a cycle
        """
        schema_path = pointer.array_expression
        if not isinstance(node, (LiteralNode, ObjectNode, ArrayNode)):
            raise MalformedNodeError(
                f"expected a literal, object or array node, got {type(node).__name__}",
                ErrorContext(schema_path=schema_path),
            )
        if id(node) in active:
            raise MalformedNodeError(
                "schema graph is cyclic",
                ErrorContext(schema_path=schema_path, node_type=node.type),
            )

        if id(node) not in state.resolved:
            subtype = node.subtype if isinstance(node, LiteralNode) else node.type
            state.resolved[id(node)] = self.resolve_rules(node, subtype, schema_path, state)

        active.add(id(node))
        if isinstance(node, ObjectNode):
            for name, child in node.children.items():
                self.resolve_tree(child, pointer.child(name), state, active)
        elif isinstance(node, ArrayNode) and node.each is not None:
            self.resolve_tree(node.each, pointer.element("*"), state, active)
        active.discard(id(node))

    def resolve_rules(
        self,
        node: LiteralNode | ObjectNode | ArrayNode,
        subtype: str,
        schema_path: str,
        state: CompilerState,
    ) -> list[ResolvedRule]:
        """Look up each rule reference of a node and run its compile phase."""
        resolved = []
        for ref in node.rules:
            context = ErrorContext(
                schema_path=schema_path,
                node_type=node.type,
                subtype=subtype if isinstance(node, LiteralNode) else None,
                rule_name=ref.name,
            )
            if not self.catalog.has_rule(ref.name):
                raise UnknownRuleError(ref.name, self.catalog.list_rules(), context)
            rule = self.catalog.get(ref.name)

            try:
                meta = rule.compile(subtype, dict(ref.options))
            except RuleOptionsError as e:
                if e.context is not None:
                    raise
                raise RuleOptionsError(e.rule_name, e.reason, context) from e
            if not isinstance(meta, RuleMeta):
                raise SchemaCompileError(
                    f"compile phase of rule '{ref.name}' must return RuleMeta, "
                    f"got {type(meta).__name__}",
                    context,
                )

            if meta.is_async:
                state.async_rules.append(meta.name)
            resolved.append(ResolvedRule(meta=meta, rule=rule))
        return resolved
