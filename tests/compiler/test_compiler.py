"""
Tests for the top-level compiler: rule resolution, dispatch and loading.
"""

import logging

import pytest

from helpers import array_of, number_field, object_of, pointers, run, string_field
from valtree.compiler import CompiledSchema, Compiler, RuntimeHelpers
from valtree.core import LiteralNode, ObjectNode, rule
from valtree.exceptions import (
    MalformedNodeError,
    RuleOptionsError,
    SchemaCompileError,
    UnknownRuleError,
)
from valtree.rules import RuleCatalog, RuleMeta, default_catalog


class TestRuleResolution:
    """Test compile-time lookup of rule references."""

    def test_unknown_rule_fails_at_compile_time(self, compiler):
        schema = object_of({"items": array_of(LiteralNode(subtype="string", rules=[rule("nope")]))})

        with pytest.raises(UnknownRuleError) as exc_info:
            compiler.compile(schema)

        error = exc_info.value
        assert error.rule_name == "nope"
        assert "string" in error.available
        assert error.context.schema_path == "items.*"
        assert "items.*" in str(error)

    def test_rule_options_are_checked_at_compile_time(self, compiler):
        schema = object_of({"age": number_field(rule("minLength", min_length=2))})

        with pytest.raises(RuleOptionsError) as exc_info:
            compiler.compile(schema)
        assert exc_info.value.rule_name == "minLength"
        assert exc_info.value.context.schema_path == "age"

    def test_compile_errors_share_a_base_class(self, compiler):
        with pytest.raises(SchemaCompileError):
            compiler.compile(LiteralNode(subtype="string", rules=[rule("range", start=1)]))

    def test_compile_phase_must_return_rule_meta(self):
        class Broken:
            def compile(self, subtype, options):
                return {"name": "broken"}

            def validate(self, value, compiled_options, context):
                pass

        compiler = Compiler(RuleCatalog({"broken": Broken()}))
        with pytest.raises(SchemaCompileError, match="RuleMeta"):
            compiler.compile(LiteralNode(subtype="string", rules=[rule("broken")]))

    def test_duck_typed_rules(self):
        """Any object with compile()/validate() can be registered."""

        class Even:
            def compile(self, subtype, options):
                return RuleMeta(name="even")

            def validate(self, value, compiled_options, context):
                if value % 2:
                    context.report("even", "must be even")

        compiler = Compiler(RuleCatalog({"even": Even()}))
        _, reporter = run(compiler.compile(LiteralNode(subtype="number", rules=[rule("even")])), 3)
        assert reporter.violations[0].message == "must be even"


class TestMalformedSchemas:
    """Test schema trees that cannot be compiled."""

    def test_cycle_is_rejected(self, compiler):
        node = ObjectNode(rules=[rule("object")])
        node.children["self"] = node

        with pytest.raises(MalformedNodeError, match="cyclic"):
            compiler.compile(node)

    def test_shared_subtree_is_not_a_cycle(self, compiler):
        address = object_of({"city": string_field()})
        schema = object_of({"home": address, "work": address})
        output, reporter = run(
            compiler.compile(schema),
            {"home": {"city": "Oslo"}, "work": {"city": 1}},
        )

        assert output == {"home": {"city": "Oslo"}, "work": {}}
        assert pointers(reporter) == ["work.city"]

    def test_too_deep_nesting_is_a_compile_error(self, compiler):
        schema = LiteralNode(subtype="number", rules=[rule("number")])
        for _ in range(30):
            schema = array_of(schema)

        with pytest.raises(MalformedNodeError, match="does not compile") as exc_info:
            compiler.compile(schema)
        assert exc_info.value.context.node_type == "array"

    def test_moderate_nesting_compiles(self, compiler):
        schema = LiteralNode(subtype="number", rules=[rule("number")])
        for _ in range(8):
            schema = array_of(schema)

        output, reporter = run(compiler.compile(schema), [[[[[[[["1"]]]]]]]])
        assert output == [[[[[[[[1]]]]]]]]
        assert not reporter.has_errors

    def test_non_node_is_rejected(self, compiler):
        node = ObjectNode()
        node.children["bad"] = {"type": "literal"}

        with pytest.raises(MalformedNodeError) as exc_info:
            compiler.compile(node)
        assert exc_info.value.context.schema_path == "bad"

    def test_invalid_procedure_name(self, compiler):
        with pytest.raises(ValueError):
            compiler.compile(string_field(), name="not valid")
        with pytest.raises(ValueError):
            compiler.compile(string_field(), name="validate_0")


class TestCompiledSchema:
    """Test the loaded procedure."""

    def test_compiled_schema_is_reusable(self, compiler):
        compiled = compiler.compile(object_of({"a": string_field()}))

        assert isinstance(compiled, CompiledSchema)
        for value in ("x", "y", 1, "z"):
            output, reporter = run(compiled, {"a": value})
            assert reporter.has_errors is not isinstance(value, str)

    def test_compiling_twice_is_deterministic(self, compiler):
        schema = object_of(
            {
                "a": string_field(),
                "items": array_of(object_of({"n": number_field()})),
            }
        )
        first, second = compiler.compile(schema), compiler.compile(schema)
        data = {"a": 1, "items": [{"n": "2"}, {"n": "x"}, {}], "extra": True}

        first_output, first_reporter = run(first, data)
        second_output, second_reporter = run(second, data)

        assert first.source == second.source
        assert first_output == second_output
        assert first_reporter.to_json() == second_reporter.to_json()

    def test_procedure_only_binds_resolved_rules(self, compiler):
        compiled = compiler.compile(object_of({"a": string_field()}))
        namespace = compiled.function.__globals__

        assert set(name for name in namespace if not name.startswith("__")) == {
            "MISSING",
            "validate",
            "validate_0",
            "options_0",
            "validate_1",
            "options_1",
        }

    def test_rule_exceptions_propagate(self, compiler):
        schema = object_of(
            {
                "a": string_field(),
                "b": LiteralNode(subtype="string", rules=[rule("exploding")]),
                "c": string_field(),
            }
        )
        with pytest.raises(RuntimeError, match="rule bug at 'b'"):
            run(compiler.compile(schema), {"a": 1, "b": "x", "c": 2})

    def test_custom_helpers(self, compiler):
        """Callers may supply their own helpers, e.g. to accept more shapes."""

        class Lenient(RuntimeHelpers):
            @staticmethod
            def is_array(value):
                return isinstance(value, (list, tuple, range))

        compiled = compiler.compile(array_of(LiteralNode(subtype="number", rules=[rule("number")])))
        collector = _Collector()
        output = compiled(range(2), collector, Lenient())

        assert output == [0, 1]
        # the array rule itself still reports the range
        assert collector.reports == [("", "array")]

    def test_line_count(self, compiler):
        compiled = compiler.compile(string_field())
        assert compiled.line_count == len([line for line in compiled.source.splitlines() if line.strip()])


class TestLogging:
    """Test compile logging."""

    def test_compile_is_logged(self, caplog):
        compiler = Compiler(default_catalog(), debug_source=True)
        with caplog.at_level(logging.DEBUG, logger="valtree.compiler.compiler"):
            compiled = compiler.compile(string_field())

        messages = [record.getMessage() for record in caplog.records]
        assert any("Compiled literal schema" in message for message in messages)
        assert any(compiled.source in message for message in messages)


class _Collector:
    def __init__(self):
        self.reports = []

    def report(self, pointer, rule, message, array_expression_pointer=None, args=None):
        self.reports.append((pointer, rule))
