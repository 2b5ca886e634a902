"""
The compiled validation procedure.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from valtree.compiler.runtime import DEFAULT_HELPERS, RuntimeHelpers


@dataclass(frozen=True)
class CompiledSchema:
    """
    Reusable result of compiling one schema.

    Calling it validates one input value: violations go to the given error
    reporter and the return value is the output built from the declared and
    validated fields (``None`` when the root value itself did not validate).
    When ``is_async`` is set the call returns an awaitable.

    Instances hold no per-call state and may be shared between concurrent
    calls.
    """

    source: str
    is_async: bool
    function: Callable[..., Any] = field(repr=False)
    async_rules: tuple[str, ...] = ()

    def __call__(
        self, root: Any, error_reporter: Any, helpers: RuntimeHelpers | None = None
    ) -> Any:
        return self.function(root, error_reporter, helpers or DEFAULT_HELPERS)

    @property
    def line_count(self) -> int:
        return sum(1 for line in self.source.splitlines() if line.strip())
