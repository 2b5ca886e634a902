"""
Schema node models for valtree.

A schema is a tree of typed nodes. Literal nodes describe scalar fields,
object nodes describe keyed containers with an ordered set of declared
children and array nodes describe lists whose members share one element
schema. Every node carries an ordered list of rule references that the
compiler resolves against a rule catalog.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from valtree.exceptions import MalformedNodeError


class RuleRef(BaseModel):
    """Reference to a named rule plus the options it is attached with."""

    name: str = Field(min_length=1)
    options: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        if not self.options:
            return self.name
        rendered = ", ".join(f"{key}={value!r}" for key, value in self.options.items())
        return f"{self.name}({rendered})"


class LiteralNode(BaseModel):
    """Scalar field such as a string, number, boolean or date."""

    type: Literal["literal"] = "literal"
    subtype: str = Field(min_length=1)
    rules: list[RuleRef] = Field(default_factory=list)


class ObjectNode(BaseModel):
    """Keyed container; children are validated in declaration order."""

    type: Literal["object"] = "object"
    children: dict[str, "SchemaNode"] = Field(default_factory=dict)
    rules: list[RuleRef] = Field(default_factory=list)

    @field_validator("children")
    @classmethod
    def _check_child_names(cls, children: dict[str, Any]) -> dict[str, Any]:
        for name in children:
            if not name:
                raise ValueError("object child names must be non-empty strings")
        return children


class ArrayNode(BaseModel):
    """List whose members are all validated against ``each`` when it is set."""

    type: Literal["array"] = "array"
    each: "SchemaNode | None" = None
    rules: list[RuleRef] = Field(default_factory=list)


SchemaNode = Annotated[
    Union[LiteralNode, ObjectNode, ArrayNode], Field(discriminator="type")
]

ObjectNode.model_rebuild()
ArrayNode.model_rebuild()

_schema_adapter = TypeAdapter(SchemaNode)


def rule(name: str, **options: Any) -> RuleRef:
    """
    Build a rule reference.

    Params:
        name: Name the rule is registered under in the catalog
        **options: Options handed to the rule's compile phase

    Returns:
        RuleRef pointing at the named rule
    """
    return RuleRef(name=name, options=options)


def load_schema(data: Any) -> LiteralNode | ObjectNode | ArrayNode:
    """
    Build a schema tree from plain data such as decoded JSON.

    Node instances found inside ``data`` are kept as they are.

    Params:
        data: Mapping describing the root node, using the ``type`` key as tag

    Returns:
        The root schema node

    Raises:
        MalformedNodeError: When ``data`` does not describe a valid node tree
    """
    try:
        return _schema_adapter.validate_python(data)
    except ValidationError as e:
        issues = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in e.errors()
        )
        raise MalformedNodeError(issues) from e
