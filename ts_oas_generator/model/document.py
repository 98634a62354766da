"""
API document and its builder.

A :class:`Document` is produced once per generation run, either by the
:class:`~ts_oas_generator.parser.OASParser` or programmatically through
:class:`DocumentBuilder`. Building always runs the registry's resolution
phase, so a returned document never contains dangling or open generic
references.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ts_oas_generator.errors import GenerationError
from ts_oas_generator.model.operation import Operation
from ts_oas_generator.model.registry import SchemaRegistry
from ts_oas_generator.model.schema import SchemaNode

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """A resolved API description."""

    info: dict[str, Any]
    registry: SchemaRegistry
    operations: list[Operation] = field(default_factory=list)

    @property
    def title(self) -> str:
        return str(self.info.get("title", ""))

    @property
    def version(self) -> str:
        return str(self.info.get("version", ""))


class DocumentBuilder:
    """Incrementally assemble a :class:`Document`.

    Example:
        >>> builder = DocumentBuilder({"title": "Discussion"})
        >>> _ = builder.add_schema("#/definitions/Foo", SchemaNode.object_type())
        >>> document = builder.build()
        >>> document.registry.type_name("#/definitions/Foo")
        'Foo'
    """

    def __init__(self, info: dict[str, Any] | None = None) -> None:
        self.info = dict(info or {})
        self.registry = SchemaRegistry()
        self.operations: list[Operation] = []
        self._operation_ids: set[str] = set()
        self._built = False

    def declare(self, key: str, name: str | None = None) -> str:
        """Reserve the type name for ``key`` ahead of registering its schema."""
        return self.registry.declare(key, name)

    def add_schema(self, key: str, node: SchemaNode, name: str | None = None) -> SchemaNode:
        return self.registry.register(key, node, name)

    def add_generic(
        self,
        key: str,
        node: SchemaNode,
        parameters: list[str],
        name: str | None = None,
    ) -> SchemaNode:
        """Register a generic declaration whose placeholders are named by ``parameters``."""
        node.generic_parameters = list(parameters)
        return self.registry.register(key, node, name)

    def add_operation(self, operation: Operation) -> Operation:
        if operation.operation_id in self._operation_ids:
            msg = f"Duplicate operationId: {operation.operation_id}"
            raise GenerationError(msg)
        self._operation_ids.add(operation.operation_id)
        self.operations.append(operation)
        return operation

    def build(self) -> Document:
        """Resolve every reference and return the finished document."""
        if self._built:
            msg = "DocumentBuilder.build() may only be called once"
            raise GenerationError(msg)
        self._built = True

        self.registry.resolve_all()
        for operation in self.operations:
            for schema in operation.iter_schemas():
                self.registry.resolve_node(schema)

        logger.debug(
            "Built document with %d schemas and %d operations", len(self.registry), len(self.operations)
        )
        return Document(info=self.info, registry=self.registry, operations=list(self.operations))
