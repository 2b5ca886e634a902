"""
Schema builders, test rules and run helpers shared by the valtree tests.
"""

import asyncio

from valtree.core import ArrayNode, LiteralNode, ObjectNode, rule
from valtree.reporters import ApiErrorReporter
from valtree.rules import AsyncRule, Rule


def string_field(*extra_rules, optional=False):
    rules = [rule("optional")] if optional else []
    return LiteralNode(subtype="string", rules=rules + [rule("string"), *extra_rules])


def number_field(*extra_rules, optional=False):
    rules = [rule("optional")] if optional else []
    return LiteralNode(subtype="number", rules=rules + [rule("number"), *extra_rules])


def object_of(children, *extra_rules):
    return ObjectNode(children=children, rules=[rule("object"), *extra_rules])


def array_of(each, *extra_rules):
    return ArrayNode(each=each, rules=[rule("array"), *extra_rules])


def run(compiled, data):
    """Run a compiled schema, awaiting it when needed; return (output, reporter)."""
    reporter = ApiErrorReporter()
    output = compiled(data, reporter)
    if compiled.is_async:
        output = asyncio.run(output)
    return output, reporter


def pointers(reporter):
    return [violation.pointer for violation in reporter.violations]


class SlowUppercaseRule(AsyncRule):
    """Async rule failing on lowercase strings; later members settle faster."""

    name = "slowUppercase"
    default_message = "slowUppercase validation failed"

    def __init__(self):
        self.events = []

    async def validate(self, value, compiled_options, context):
        self.events.append(("start", context.pointer))
        delay = compiled_options.get("delay", 0.0)
        await asyncio.sleep(delay / (len(self.events) + 1))
        self.events.append(("end", context.pointer))
        if isinstance(value, str) and value != value.upper():
            self.fail(context, compiled_options)


class RecordingRule(Rule):
    """Records every value it sees; optionally tolerates absent values."""

    name = "recording"
    default_message = "recording validation failed"

    def __init__(self, allow_undefined=False):
        self.allow_undefined = allow_undefined
        self.seen = []

    def validate(self, value, compiled_options, context):
        self.seen.append(value)


class ExplodingRule(Rule):
    name = "exploding"

    def validate(self, value, compiled_options, context):
        raise RuntimeError(f"rule bug at {context.pointer!r}")
