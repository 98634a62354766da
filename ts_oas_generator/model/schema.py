"""
Schema model for the TypeScript client generator.

A :class:`SchemaNode` is the in-memory form of one JSON Schema definition.
Named schemas carry an identity ``key``; references to them are separate
``REFERENCE`` nodes holding ``ref_key``, so the graph may contain forward and
cyclic references that are looked up in the registry after every schema has
been registered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ts_oas_generator.constants import BINARY_FORMATS


class SchemaKind(str, Enum):
    """Structural category of a schema node."""

    PRIMITIVE = "primitive"
    OBJECT = "object"
    ARRAY = "array"
    ENUM = "enum"
    UNION = "union"
    ANY = "any"
    GENERIC_PARAMETER = "generic-parameter"
    REFERENCE = "reference"


@dataclass
class Property:
    """A named member of an object schema."""

    name: str
    schema: SchemaNode
    required: bool = False
    description: str | None = None


@dataclass
class SchemaNode:
    """One node of the schema graph."""

    kind: SchemaKind
    key: str | None = None
    name: str | None = None
    description: str | None = None
    primitive: str | None = None
    format: str | None = None
    properties: list[Property] = field(default_factory=list)
    base: SchemaNode | None = None
    items: SchemaNode | None = None
    additional_properties: SchemaNode | None = None
    enum_values: list[Any] = field(default_factory=list)
    enum_names: list[str] = field(default_factory=list)
    ref_key: str | None = None
    generic_parameters: list[str] = field(default_factory=list)
    generic_arguments: list[SchemaNode] = field(default_factory=list)
    generic_parameter: str | None = None
    bound: SchemaNode | None = None
    variants: list[SchemaNode] = field(default_factory=list)
    discriminator: str | None = None
    discriminator_mapping: dict[str, str] = field(default_factory=dict)
    nullable: bool = False
    is_abstract: bool = False

    # Factories used by the parser and by the declarative builder API

    @classmethod
    def primitive_type(cls, primitive: str, schema_format: str | None = None, **kwargs: Any) -> SchemaNode:  # noqa: ANN401
        return cls(kind=SchemaKind.PRIMITIVE, primitive=primitive, format=schema_format, **kwargs)

    @classmethod
    def any_type(cls, **kwargs: Any) -> SchemaNode:  # noqa: ANN401
        return cls(kind=SchemaKind.ANY, **kwargs)

    @classmethod
    def object_type(
        cls,
        properties: list[Property] | None = None,
        *,
        base: SchemaNode | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> SchemaNode:
        return cls(kind=SchemaKind.OBJECT, properties=list(properties or []), base=base, **kwargs)

    @classmethod
    def dictionary_type(cls, values: SchemaNode, **kwargs: Any) -> SchemaNode:  # noqa: ANN401
        return cls(kind=SchemaKind.OBJECT, additional_properties=values, **kwargs)

    @classmethod
    def array_type(cls, items: SchemaNode, **kwargs: Any) -> SchemaNode:  # noqa: ANN401
        return cls(kind=SchemaKind.ARRAY, items=items, **kwargs)

    @classmethod
    def enum_type(cls, values: list[Any], primitive: str = "string", **kwargs: Any) -> SchemaNode:  # noqa: ANN401
        return cls(kind=SchemaKind.ENUM, enum_values=list(values), primitive=primitive, **kwargs)

    @classmethod
    def union_type(cls, variants: list[SchemaNode], **kwargs: Any) -> SchemaNode:  # noqa: ANN401
        return cls(kind=SchemaKind.UNION, variants=list(variants), **kwargs)

    @classmethod
    def reference(cls, key: str, generic_arguments: list[SchemaNode] | None = None, **kwargs: Any) -> SchemaNode:  # noqa: ANN401
        return cls(kind=SchemaKind.REFERENCE, ref_key=key, generic_arguments=list(generic_arguments or []), **kwargs)

    @classmethod
    def generic_placeholder(cls, parameter: str, bound: SchemaNode | None = None) -> SchemaNode:
        return cls(kind=SchemaKind.GENERIC_PARAMETER, generic_parameter=parameter, bound=bound)

    @property
    def is_reference(self) -> bool:
        return self.kind is SchemaKind.REFERENCE

    @property
    def is_generic_declaration(self) -> bool:
        return bool(self.generic_parameters)

    @property
    def is_dictionary(self) -> bool:
        return self.kind is SchemaKind.OBJECT and not self.properties and self.additional_properties is not None

    @property
    def is_file(self) -> bool:
        return self.kind is SchemaKind.PRIMITIVE and (self.primitive == "file" or self.format in BINARY_FORMATS)

    @property
    def base_key(self) -> str | None:
        """Identity key of the direct base type, if any."""
        return self.base.ref_key if self.base is not None and self.base.is_reference else None

    def iter_children(self) -> list[SchemaNode]:
        """Direct child nodes, used for graph walks."""
        children = [prop.schema for prop in self.properties]
        children.extend(
            node for node in (self.base, self.items, self.additional_properties, self.bound) if node is not None
        )
        children.extend(self.generic_arguments)
        children.extend(self.variants)
        return children
