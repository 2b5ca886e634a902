"""
Field pointer utilities for valtree.

A field pointer identifies where a value lives inside the validated input.
Static segments come from object child names; dynamic segments are the index
variables of enclosing array loops, only known while the compiled procedure
runs. This module turns a pointer into the pieces the compiler emits: the
Python expression rendering the concrete pointer, the array expression
pointer used for message lookup, and the expression fetching the value.
"""

from dataclasses import dataclass

MISSING_NAME = "MISSING"
WILDCARD = "*"


@dataclass(frozen=True)
class PointerSegment:
    """One step of a field pointer."""

    name: str
    dynamic: bool = False

    def __str__(self) -> str:
        return WILDCARD if self.dynamic else self.name


@dataclass(frozen=True)
class FieldPointer:
    """
    Location of a field in the input, from the root down.

    The root pointer has no segments and renders as the empty string.
    """

    segments: tuple[PointerSegment, ...] = ()

    def child(self, name: str) -> "FieldPointer":
        """Return the pointer of an object child."""
        return FieldPointer(self.segments + (PointerSegment(name),))

    def element(self, index_variable: str) -> "FieldPointer":
        """Return the pointer of an array element addressed by an index variable."""
        return FieldPointer(self.segments + (PointerSegment(index_variable, True),))

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def last(self) -> PointerSegment | None:
        return self.segments[-1] if self.segments else None

    @property
    def index_variables(self) -> tuple[str, ...]:
        """Names of the enclosing index variables, outermost first."""
        return tuple(segment.name for segment in self.segments if segment.dynamic)

    @property
    def has_dynamic(self) -> bool:
        return any(segment.dynamic for segment in self.segments)

    @property
    def array_expression(self) -> str:
        """Pointer with every index replaced by ``*`` (e.g. ``items.*.name``)."""
        return ".".join(str(segment) for segment in self.segments)

    def render(self, indices: dict[str, int] | None = None) -> str:
        """
        Render the concrete pointer for known index values.

        Params:
            indices: Value of each index variable

        Returns:
            Dot separated pointer such as ``items.1.name``

        Raises:
            KeyError: If an index variable has no value in ``indices``
        """
        indices = indices or {}
        return ".".join(
            str(indices[segment.name]) if segment.dynamic else segment.name
            for segment in self.segments
        )

    def __str__(self) -> str:
        return self.array_expression


@dataclass(frozen=True)
class ResolvedPointer:
    """Code fragments the compiler emits for one field."""

    pointer_expression: str
    array_expression_pointer: str | None
    value_expression: str


class PointerResolver:
    """Builds the generated-code fragments that address a field."""

    @staticmethod
    def pointer_expression(pointer: FieldPointer) -> str:
        """
        Build a Python expression evaluating to the concrete pointer.

        Static runs of segments are folded into string literals and index
        variables are converted with ``str()``, so ``items.<index_0>.name``
        becomes ``'items.' + str(index_0) + '.name'``.

        Params:
            pointer: The field pointer

        Returns:
            Python source of a ``str`` expression
        """
        parts: list[str] = []
        text = ""
        for position, segment in enumerate(pointer.segments):
            separator = "." if position else ""
            if segment.dynamic:
                text += separator
                if text:
                    parts.append(repr(text))
                    text = ""
                parts.append(f"str({segment.name})")
            else:
                text += separator + segment.name
        if text or not parts:
            parts.append(repr(text))
        return " + ".join(parts)

    @staticmethod
    def array_expression_pointer(pointer: FieldPointer) -> str | None:
        """Return the wildcard pointer, or None outside of any array."""
        if not pointer.has_dynamic:
            return None
        return pointer.array_expression

    @staticmethod
    def value_expression(pointer: FieldPointer, parent_variable: str | None) -> str:
        """
        Build a Python expression fetching the field's value from its parent.

        Object children are read with ``.get`` so that an absent key yields the
        ``MISSING`` sentinel; array elements are read by index. The root has no
        parent and reads the ``root`` argument.

        Params:
            pointer: The field pointer
            parent_variable: Variable holding the parent container

        Returns:
            Python source of the value lookup
        """
        segment = pointer.last
        if segment is None or parent_variable is None:
            return "root"
        if segment.dynamic:
            return f"{parent_variable}[{segment.name}]"
        return f"{parent_variable}.get({segment.name!r}, {MISSING_NAME})"

    @classmethod
    def resolve(
        cls, pointer: FieldPointer, parent_variable: str | None
    ) -> ResolvedPointer:
        """Resolve every fragment for a field at once."""
        return ResolvedPointer(
            pointer_expression=cls.pointer_expression(pointer),
            array_expression_pointer=cls.array_expression_pointer(pointer),
            value_expression=cls.value_expression(pointer, parent_variable),
        )
