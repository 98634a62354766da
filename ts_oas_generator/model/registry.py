"""
Schema registry with deferred reference resolution.

Schemas are registered in two phases. Phase one declares every identity key
and reserves its generated type name; phase two (:meth:`SchemaRegistry.resolve_all`)
walks the graph, checks that every reference points at a registered key and
expands references to generic declarations into concrete instantiations.

Instantiations are cached by ``(declaration key, argument keys)`` so that
``Base<A>`` is only ever generated once, while ``Base<B>`` becomes a separate
type with its own name.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator
from typing import Final

from ts_oas_generator.errors import GenerationError, UnresolvedSchemaError
from ts_oas_generator.model.schema import SchemaKind, SchemaNode
from ts_oas_generator.utils.string_case import capitalcase, ts_type_name

logger = logging.getLogger(__name__)

# Names used by the emitted helper code
RESERVED_TYPE_NAMES: Final = frozenset(
    {"ApiException", "FileParameter", "FileResponse", "Observable", "HttpClient", "HttpHeaders", "Blob", "Date"}
)


def _name_from_key(key: str) -> str:
    return ts_type_name(key.rsplit("/", 1)[-1])


def _contains_placeholder(node: SchemaNode) -> bool:
    stack = [node]
    seen: set[int] = set()
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if current.kind is SchemaKind.GENERIC_PARAMETER:
            return True
        stack.extend(current.iter_children())
    return False


def _substitute(node: SchemaNode, bindings: dict[str, SchemaNode]) -> SchemaNode:
    """Return a copy of ``node`` with generic placeholders replaced by their bound arguments."""
    if node.kind is SchemaKind.GENERIC_PARAMETER and node.generic_parameter in bindings:
        argument = bindings[node.generic_parameter]
        return dataclasses.replace(argument, nullable=argument.nullable or node.nullable)

    def sub(child: SchemaNode | None) -> SchemaNode | None:
        return _substitute(child, bindings) if child is not None else None

    return dataclasses.replace(
        node,
        properties=[dataclasses.replace(prop, schema=_substitute(prop.schema, bindings)) for prop in node.properties],
        base=sub(node.base),
        items=sub(node.items),
        additional_properties=sub(node.additional_properties),
        bound=sub(node.bound),
        generic_arguments=[_substitute(arg, bindings) for arg in node.generic_arguments],
        variants=[_substitute(variant, bindings) for variant in node.variants],
        enum_values=list(node.enum_values),
        enum_names=list(node.enum_names),
        discriminator_mapping=dict(node.discriminator_mapping),
    )


class SchemaRegistry:
    """Arena of named schemas keyed by identity key.

    A registry belongs to exactly one generation run.
    """

    def __init__(self) -> None:
        self._schemas: dict[str, SchemaNode] = {}
        self._names: dict[str, str] = {}
        self._used_names: set[str] = set(RESERVED_TYPE_NAMES)
        self._instantiations: dict[tuple[str, tuple[str, ...]], str] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._schemas))

    def declare(self, key: str, name: str | None = None) -> str:
        """Reserve a stable, unique type name for ``key`` and return it."""
        if key in self._names:
            return self._names[key]

        candidate = ts_type_name(name) if name else _name_from_key(key)
        unique = candidate
        suffix = 2
        while unique in self._used_names:
            unique = f"{candidate}{suffix}"
            suffix += 1

        if unique != candidate:
            logger.debug("Type name %s is taken, using %s for %s", candidate, unique, key)

        self._used_names.add(unique)
        self._names[key] = unique
        return unique

    def register(self, key: str, node: SchemaNode, name: str | None = None) -> SchemaNode:
        """Store ``node`` under ``key``; the node receives its key and generated name."""
        node.key = key
        node.name = self.declare(key, name)
        self._schemas[key] = node
        return node

    def get(self, key: str) -> SchemaNode:
        try:
            return self._schemas[key]
        except KeyError:
            raise UnresolvedSchemaError(key) from None

    def type_name(self, key: str) -> str:
        if key not in self._schemas:
            raise UnresolvedSchemaError(key)
        return self._names[key]

    def schemas(self) -> list[SchemaNode]:
        """All concrete schemas in registration order; open generic declarations are excluded."""
        return [node for node in self._schemas.values() if not node.is_generic_declaration]

    def derived_keys(self, base_key: str) -> list[str]:
        """Keys of the concrete schemas whose direct base is ``base_key``."""
        return [node.key for node in self.schemas() if node.key and node.base_key == base_key]

    def instantiate(self, declaration_key: str, arguments: list[SchemaNode]) -> str:
        """Return the identity key of ``declaration<arguments>``, creating it on first use."""
        declaration = self.get(declaration_key)
        if not declaration.is_generic_declaration:
            logger.debug("Ignoring generic arguments on non-generic schema %s", declaration_key)
            return declaration_key

        if len(arguments) != len(declaration.generic_parameters):
            msg = (
                f"Schema {declaration_key} expects {len(declaration.generic_parameters)} generic "
                f"argument(s), got {len(arguments)}"
            )
            raise GenerationError(msg)

        for argument in arguments:
            self.resolve_node(argument)

        argument_keys = tuple(self._argument_key(argument) for argument in arguments)
        cache_key = (declaration_key, argument_keys)
        if cache_key in self._instantiations:
            return self._instantiations[cache_key]

        key = f"{declaration_key}<{','.join(argument_keys)}>"
        name = f"{declaration.name}Of" + "And".join(self._argument_name(argument) for argument in arguments)
        bindings = dict(zip(declaration.generic_parameters, arguments, strict=True))

        instance = _substitute(declaration, bindings)
        instance.generic_parameters = []

        # Cache before resolving so self-referencing generics terminate
        self._instantiations[cache_key] = key
        self.register(key, instance, name=name)
        logger.debug("Instantiated %s as %s", key, instance.name)
        self.resolve_node(instance)
        return key

    def resolve_node(self, node: SchemaNode) -> None:
        """Check and expand every reference reachable from ``node``."""
        stack = [node]
        seen: set[int] = set()
        while stack:
            current = stack.pop()
            if id(current) in seen:
                continue
            seen.add(id(current))

            if current.is_reference and current.ref_key is not None:
                if current.generic_arguments and not any(map(_contains_placeholder, current.generic_arguments)):
                    current.ref_key = self.instantiate(current.ref_key, current.generic_arguments)
                    current.generic_arguments = []
                elif current.ref_key not in self._schemas:
                    raise UnresolvedSchemaError(current.ref_key)

            stack.extend(current.iter_children())

    def resolve_all(self) -> None:
        """Phase two: resolve every registered schema and validate inheritance chains."""
        for key in list(self._schemas):
            self.resolve_node(self._schemas[key])

        for key in list(self._schemas):
            self._check_base_chain(key)

    def _check_base_chain(self, key: str) -> None:
        visited = [key]
        current = self._schemas[key].base_key
        while current is not None:
            if current in visited:
                msg = f"Inheritance cycle detected: {' -> '.join([*visited, current])}"
                raise GenerationError(msg)
            visited.append(current)
            current = self.get(current).base_key

    def _argument_key(self, node: SchemaNode) -> str:
        match node.kind:
            case SchemaKind.REFERENCE:
                return str(node.ref_key)
            case SchemaKind.PRIMITIVE:
                return f"{node.primitive}:{node.format}" if node.format else str(node.primitive)
            case SchemaKind.ARRAY:
                return f"{self._argument_key(node.items)}[]" if node.items else "any[]"
            case SchemaKind.ENUM:
                return "enum(" + ",".join(map(str, node.enum_values)) + ")"
            case SchemaKind.UNION:
                return "|".join(self._argument_key(variant) for variant in node.variants)
            case SchemaKind.OBJECT if node.is_dictionary and node.additional_properties:
                return "{" + self._argument_key(node.additional_properties) + "}"
            case SchemaKind.OBJECT:
                members = ",".join(f"{prop.name}:{self._argument_key(prop.schema)}" for prop in node.properties)
                return "{" + members + "}"
            case SchemaKind.GENERIC_PARAMETER:
                return f"${node.generic_parameter}"
            case _:
                return "any"

    def _argument_name(self, node: SchemaNode) -> str:
        match node.kind:
            case SchemaKind.REFERENCE if node.ref_key is not None:
                return self.type_name(node.ref_key)
            case SchemaKind.PRIMITIVE:
                return capitalcase(node.primitive)
            case SchemaKind.ARRAY:
                return "ArrayOf" + (self._argument_name(node.items) if node.items else "Object")
            case SchemaKind.OBJECT if node.is_dictionary and node.additional_properties:
                return "DictionaryOf" + self._argument_name(node.additional_properties)
            case SchemaKind.ANY:
                return "Object"
            case _:
                return "Anonymous"
