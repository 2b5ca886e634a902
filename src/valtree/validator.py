"""
High-level validation entry points.

``Validator`` compiles schemas on first use, keeps the compiled procedures
and runs them with a fresh reporter per call:

    validator = Validator()
    output = validator.validate(schema, data, cache_key="signup")

A call returns the output built from the declared and validated fields, or
raises ``ValidationException`` carrying the reporter's serialised violations.
"""

import logging
from collections.abc import Hashable, Mapping
from typing import Any

from valtree.compiler import CompiledSchema, Compiler
from valtree.config import ValidatorConfig
from valtree.core.nodes import ArrayNode, LiteralNode, ObjectNode
from valtree.exceptions import AsyncSchemaError
from valtree.reporters import ErrorReporter, MessageTemplate
from valtree.rules.registry import RuleCatalog

logger = logging.getLogger(__name__)

Schema = LiteralNode | ObjectNode | ArrayNode


class Validator:
    """Compile-once, run-many front end over ``Compiler``.

    Notes:
      - Schemas are cached under ``cache_key`` when given, otherwise under the
        identity of the root node; pass a key when schemas are rebuilt per call.
      - The cache keeps the root node alive alongside its procedure, so an
        identity key is never reused by another schema.
    """

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        catalog: RuleCatalog | None = None,
    ):
        self.config = config or ValidatorConfig()
        self.compiler = Compiler(catalog, debug_source=self.config.debug_source)
        self._cache: dict[Hashable, tuple[Schema, CompiledSchema]] = {}

    def compile(self, schema: Schema, cache_key: Hashable | None = None) -> CompiledSchema:
        """
        Return the compiled procedure of ``schema``, compiling it when needed.

        Params:
            schema: Root node of the schema
            cache_key: Explicit cache key; defaults to the schema identity

        Returns:
            The compiled procedure
        """
        if not self.config.cache_enabled:
            return self.compiler.compile(schema)

        key = cache_key if cache_key is not None else ("id", id(schema))
        cached = self._cache.get(key)
        if cached is not None and (cache_key is not None or cached[0] is schema):
            logger.debug("Compiled schema cache hit for %r", key)
            return cached[1]

        logger.debug("Compiled schema cache miss for %r", key)
        compiled = self.compiler.compile(schema)
        self._cache[key] = (schema, compiled)
        return compiled

    def clear_cache(self) -> None:
        self._cache.clear()

    def _reporter(
        self,
        reporter: ErrorReporter | None,
        messages: Mapping[str, MessageTemplate] | None,
        bail: bool | None,
    ) -> ErrorReporter:
        if reporter is not None:
            return reporter
        return self.config.make_reporter(messages=messages, bail=bail)

    def validate(
        self,
        schema: Schema,
        data: Any,
        messages: Mapping[str, MessageTemplate] | None = None,
        reporter: ErrorReporter | None = None,
        bail: bool | None = None,
        cache_key: Hashable | None = None,
    ) -> Any:
        """
        Validate ``data`` against a schema without asynchronous rules.

        Params:
            schema: Root node of the schema
            data: Value to validate
            messages: Custom messages, replacing the configured ones
            reporter: Reporter to use instead of a configured one
            bail: Override the configured bail mode
            cache_key: Explicit compile cache key

        Returns:
            Output holding the declared and validated fields

        Raises:
            ValidationException: When any violation was reported
            AsyncSchemaError: When the schema holds asynchronous rules
        """
        compiled = self.compile(schema, cache_key)
        if compiled.is_async:
            raise AsyncSchemaError(list(compiled.async_rules))

        error_reporter = self._reporter(reporter, messages, bail)
        output = compiled(data, error_reporter)
        if error_reporter.has_errors:
            raise error_reporter.to_error()
        return output

    async def validate_async(
        self,
        schema: Schema,
        data: Any,
        messages: Mapping[str, MessageTemplate] | None = None,
        reporter: ErrorReporter | None = None,
        bail: bool | None = None,
        cache_key: Hashable | None = None,
    ) -> Any:
        """Validate ``data`` against any schema, awaiting asynchronous rules."""
        compiled = self.compile(schema, cache_key)
        error_reporter = self._reporter(reporter, messages, bail)
        output = compiled(data, error_reporter)
        if compiled.is_async:
            output = await output
        if error_reporter.has_errors:
            raise error_reporter.to_error()
        return output


_default_validator = Validator()


def validate(schema: Schema, data: Any, **kwargs: Any) -> Any:
    """Validate with a module level ``Validator`` using the default configuration."""
    return _default_validator.validate(schema, data, **kwargs)


async def validate_async(schema: Schema, data: Any, **kwargs: Any) -> Any:
    """Asynchronous counterpart of ``validate``."""
    return await _default_validator.validate_async(schema, data, **kwargs)
