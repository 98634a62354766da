"""
Schema to TypeScript type resolution.

The resolver maps schema nodes to :class:`TypeReference` values which carry
both the rendered TypeScript type and enough structure (category, item type,
schema key) for the emitter to decide how values are converted between JSON
and DTO instances.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum

from ts_oas_generator.config import DateType, GenerationPolicy
from ts_oas_generator.constants import DATE_FORMATS, TYPESCRIPT_PRIMITIVES
from ts_oas_generator.model import Property, SchemaKind, SchemaNode, SchemaRegistry
from ts_oas_generator.utils.string_case import quote_property_key

logger = logging.getLogger(__name__)


class TypeCategory(str, Enum):
    PRIMITIVE = "primitive"
    DATE = "date"
    FILE = "file"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ARRAY = "array"
    DICTIONARY = "dictionary"
    UNION = "union"
    INLINE_OBJECT = "inline-object"
    ANY = "any"


class TypeContext(str, Enum):
    """Where a type is used; only file types render differently per context."""

    PROPERTY = "property"
    PARAMETER = "parameter"
    RESPONSE = "response"


_FILE_TYPE_NAMES = {
    TypeContext.PROPERTY: "Blob",
    TypeContext.PARAMETER: "FileParameter",
    TypeContext.RESPONSE: "FileResponse",
}


@dataclass(frozen=True)
class TypeReference:
    """A resolved TypeScript type."""

    name: str
    category: TypeCategory
    item: TypeReference | None = None
    nullable: bool = False
    schema_key: str | None = None
    is_abstract: bool = False

    @property
    def rendered(self) -> str:
        return f"{self.name} | null" if self.nullable else self.name

    @property
    def needs_conversion(self) -> bool:
        """True when JSON values must be revived into DTO instances or dates."""
        if self.category in (TypeCategory.CLASS, TypeCategory.DATE):
            return True
        if self.category in (TypeCategory.ARRAY, TypeCategory.DICTIONARY) and self.item is not None:
            return self.item.category in (TypeCategory.CLASS, TypeCategory.DATE)
        return False

    @property
    def is_file(self) -> bool:
        return self.category is TypeCategory.FILE


ANY_TYPE = TypeReference("any", TypeCategory.ANY)


class TypeResolver:
    """Resolve schema nodes against one registry under one policy."""

    def __init__(self, registry: SchemaRegistry, policy: GenerationPolicy) -> None:
        self.registry = registry
        self.policy = policy

    def resolve(self, node: SchemaNode, context: TypeContext = TypeContext.PROPERTY) -> TypeReference:
        return self._resolve(node, context, frozenset())

    def resolve_parameter(self, node: SchemaNode) -> TypeReference:
        return self.resolve(node, TypeContext.PARAMETER)

    def resolve_response(self, node: SchemaNode) -> TypeReference:
        return self.resolve(node, TypeContext.RESPONSE)

    def _resolve(self, node: SchemaNode, context: TypeContext, aliases: frozenset[str]) -> TypeReference:
        match node.kind:
            case SchemaKind.REFERENCE:
                return self._resolve_reference(node, context, aliases)
            case SchemaKind.PRIMITIVE:
                return self._resolve_primitive(node, context)
            case SchemaKind.ENUM:
                if node.key is not None:
                    return TypeReference(str(node.name), TypeCategory.ENUM, nullable=node.nullable, schema_key=node.key)
                literals = " | ".join(json.dumps(value) for value in node.enum_values) or "any"
                return TypeReference(literals, TypeCategory.PRIMITIVE, nullable=node.nullable)
            case SchemaKind.ARRAY:
                item = self._resolve(node.items, context, aliases) if node.items else ANY_TYPE
                item_name = f"({item.rendered})" if item.nullable or item.category is TypeCategory.UNION else item.name
                return TypeReference(f"{item_name}[]", TypeCategory.ARRAY, item=item, nullable=node.nullable)
            case SchemaKind.OBJECT:
                return self._resolve_object(node, context, aliases)
            case SchemaKind.UNION:
                variants: list[TypeReference] = []
                for variant in node.variants:
                    resolved = self._resolve(variant, context, aliases)
                    if resolved.rendered not in (existing.rendered for existing in variants):
                        variants.append(resolved)
                if len(variants) == 1:
                    only = variants[0]
                    return TypeReference(
                        only.name, only.category, only.item, only.nullable or node.nullable, only.schema_key
                    )
                if not variants:
                    return ANY_TYPE
                name = " | ".join(variant.rendered for variant in variants)
                return TypeReference(name, TypeCategory.UNION, nullable=node.nullable)
            case SchemaKind.GENERIC_PARAMETER:
                if node.bound is not None:
                    bound = self._resolve(node.bound, context, aliases)
                    return TypeReference(
                        bound.name, bound.category, bound.item, bound.nullable or node.nullable, bound.schema_key,
                        bound.is_abstract,
                    )
                return ANY_TYPE
            case _:
                return TypeReference("any", TypeCategory.ANY, nullable=node.nullable)

    def _resolve_reference(self, node: SchemaNode, context: TypeContext, aliases: frozenset[str]) -> TypeReference:
        key = str(node.ref_key)
        target = self.registry.get(key)

        if self.is_declared_type(target):
            resolved = self._named(target)
            return TypeReference(
                resolved.name, resolved.category, nullable=node.nullable or target.nullable, schema_key=key,
                is_abstract=target.is_abstract,
            )

        # Named alias of an array, primitive, union or dictionary
        if key in aliases:
            logger.debug("Self-referencing alias %s resolved to any", key)
            return ANY_TYPE
        resolved = self._resolve(target, context, aliases | {key})
        return TypeReference(
            resolved.name, resolved.category, resolved.item, resolved.nullable or node.nullable, resolved.schema_key,
            resolved.is_abstract,
        )

    def _named(self, target: SchemaNode) -> TypeReference:
        if target.kind is SchemaKind.ENUM:
            return TypeReference(str(target.name), TypeCategory.ENUM, schema_key=target.key)
        category = TypeCategory.CLASS if self.policy.generate_dto_types else TypeCategory.INTERFACE
        return TypeReference(str(target.name), category, schema_key=target.key, is_abstract=target.is_abstract)

    def _resolve_primitive(self, node: SchemaNode, context: TypeContext) -> TypeReference:
        if node.is_file:
            return TypeReference(_FILE_TYPE_NAMES[context], TypeCategory.FILE, nullable=node.nullable)
        if node.primitive == "string" and node.format in DATE_FORMATS:
            if self.policy.effective_date_type is DateType.DATE:
                return TypeReference("Date", TypeCategory.DATE, nullable=node.nullable)
            return TypeReference("string", TypeCategory.PRIMITIVE, nullable=node.nullable)
        name = TYPESCRIPT_PRIMITIVES.get(str(node.primitive), "any")
        category = TypeCategory.PRIMITIVE if name != "any" else TypeCategory.ANY
        return TypeReference(name, category, nullable=node.nullable)

    def _resolve_object(self, node: SchemaNode, context: TypeContext, aliases: frozenset[str]) -> TypeReference:
        if node.key is not None and not node.is_dictionary:
            return self._named(node)

        if node.is_dictionary and node.additional_properties is not None:
            value = self._resolve(node.additional_properties, context, aliases)
            return TypeReference(
                f"{{ [key: string]: {value.rendered}; }}", TypeCategory.DICTIONARY, item=value, nullable=node.nullable
            )

        if not node.properties and node.base is None:
            return TypeReference("any", TypeCategory.ANY, nullable=node.nullable)

        members = " ".join(self.render_member(prop, context, aliases) for prop in node.properties)
        literal = f"{{ {members} }}" if members else "{}"
        if node.base is not None:
            base = self._resolve(node.base, context, aliases)
            literal = f"{base.name} & {literal}" if members else base.name
        return TypeReference(literal, TypeCategory.INLINE_OBJECT, nullable=node.nullable)

    def render_member(
        self, prop: Property, context: TypeContext = TypeContext.PROPERTY, aliases: frozenset[str] = frozenset()
    ) -> str:
        """Render one member of a structural type literal."""
        resolved = self._resolve(prop.schema, context, aliases)
        key = quote_property_key(prop.name)
        if prop.required:
            return f"{key}: {resolved.rendered};"
        return f"{key}?: {resolved.rendered} | undefined;"

    # Declared types

    @staticmethod
    def is_declared_type(node: SchemaNode) -> bool:
        """Named objects and enums are emitted as declarations; other named schemas are aliases."""
        if node.key is None:
            return False
        return node.kind is SchemaKind.ENUM or (node.kind is SchemaKind.OBJECT and not node.is_dictionary)

    def base_of(self, node: SchemaNode) -> SchemaNode | None:
        base_key = node.base_key
        return self.registry.get(base_key) if base_key else None

    def ancestors(self, node: SchemaNode) -> list[SchemaNode]:
        """Base chain of ``node``, root first."""
        chain: list[SchemaNode] = []
        current = self.base_of(node)
        while current is not None:
            chain.insert(0, current)
            current = self.base_of(current)
        return chain

    def own_properties(self, node: SchemaNode) -> list[Property]:
        """Properties declared on ``node`` itself, minus an inherited discriminator."""
        discriminator = self.discriminator_property(node)
        return [prop for prop in node.properties if prop.name != discriminator]

    def flattened_properties(self, node: SchemaNode) -> list[Property]:
        """Base properties followed by own properties; later declarations override earlier ones."""
        merged: dict[str, Property] = {}
        for current in [*self.ancestors(node), node]:
            for prop in current.properties:
                merged[prop.name] = prop
        return list(merged.values())

    def discriminator_owner(self, node: SchemaNode) -> SchemaNode | None:
        """Nearest schema in the chain of ``node`` (itself included) that declares a discriminator."""
        for current in [node, *reversed(self.ancestors(node))]:
            if current.discriminator:
                return current
        return None

    def discriminator_property(self, node: SchemaNode) -> str | None:
        owner = self.discriminator_owner(node)
        return owner.discriminator if owner else None

    def discriminator_value(self, node: SchemaNode) -> str:
        """Value that identifies ``node`` in the discriminator property."""
        owner = self.discriminator_owner(node)
        if owner is not None:
            for value, target in owner.discriminator_mapping.items():
                if target == node.key:
                    return value
        return node.key.rsplit("/", 1)[-1] if node.key else str(node.name)

    def derived_types(self, node: SchemaNode) -> list[SchemaNode]:
        """All concrete descendants of ``node`` in registration order."""
        if node.key is None:
            return []
        descendants: list[SchemaNode] = []
        pending = [node.key]
        while pending:
            current = pending.pop(0)
            for key in self.registry.derived_keys(current):
                descendants.append(self.registry.get(key))
                pending.append(key)
        order = {schema.key: index for index, schema in enumerate(self.registry.schemas())}
        return sorted(descendants, key=lambda schema: order.get(schema.key, 0))

    @staticmethod
    def concrete_initializer(resolved: TypeReference) -> str | None:
        """Expression that allocates a default value for a required property."""
        if resolved.nullable:
            return None
        match resolved.category:
            case TypeCategory.CLASS if not resolved.is_abstract:
                return f"new {resolved.name}()"
            case TypeCategory.ARRAY:
                return "[]"
            case TypeCategory.DICTIONARY:
                return "{}"
            case _:
                return None
