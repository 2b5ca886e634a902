"""
Validator configuration.
"""

from collections.abc import Callable, Mapping
from typing import Any

from attrs import field, frozen

from valtree.reporters import ErrorReporter, MessageTemplate, VanillaErrorReporter

ReporterFactory = Callable[..., ErrorReporter]


@frozen
class ValidatorConfig:
    """Defaults applied by ``Validator`` to every call.

    Attributes:
      - bail: Stop at the first violation instead of collecting all of them.
      - reporter_factory: Called with ``messages`` and ``bail`` to create the
        reporter of a call.
      - messages: Custom messages used when a call passes none.
      - cache_enabled: Keep compiled schemas for reuse across calls.
      - debug_source: Log the generated source of every compiled schema.
    """

    bail: bool = False
    reporter_factory: ReporterFactory = VanillaErrorReporter
    messages: Mapping[str, MessageTemplate] = field(factory=dict)
    cache_enabled: bool = True
    debug_source: bool = False

    def make_reporter(
        self,
        messages: Mapping[str, MessageTemplate] | None = None,
        bail: bool | None = None,
    ) -> Any:
        return self.reporter_factory(
            messages=self.messages if messages is None else messages,
            bail=self.bail if bail is None else bail,
        )
