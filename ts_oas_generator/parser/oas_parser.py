"""
OpenAPI Specification Parser for TypeScript Client Generation.

This module reads Swagger 2.0 and OpenAPI 3.x documents (JSON or YAML) and
turns them into a resolved :class:`~ts_oas_generator.model.Document`.

Schemas are registered in two passes: every named definition is declared
first so that forward and cyclic ``$ref`` chains resolve regardless of the
order in which the document lists them.

Generic types are described with vendor extensions:

``x-generic-parameters``
    On a named schema, the list of placeholder names it is generic over.
``x-generic-parameter``
    On a property schema, the placeholder it stands for. A ``$ref`` next to
    it names the placeholder's bound.
``x-generic-arguments``
    Next to a ``$ref`` to a generic declaration, the argument schemas.
"""

import json
import logging
from pathlib import Path
from typing import Any, Final

import yaml

from ts_oas_generator.constants import (
    CONTENT_TYPE_OCTET_STREAM,
    FORM_CONTENT_TYPES,
    HTTP_METHODS,
    JSON_COMPATIBLE_CONTENT_TYPES,
    OPENAPI_SCHEMAS_PREFIX,
    SWAGGER_DEFINITIONS_PREFIX,
)
from ts_oas_generator.errors import DocumentLoadError, UnresolvedSchemaError
from ts_oas_generator.model import (
    Document,
    DocumentBuilder,
    Operation,
    Parameter,
    ParameterLocation,
    Property,
    Response,
    SchemaNode,
)
from ts_oas_generator.utils.string_case import ts_method_name, ts_type_name

logger = logging.getLogger(__name__)

_PRIMITIVE_TYPES: Final = frozenset({"string", "integer", "number", "boolean", "file"})

# Keys of a Swagger 2.0 non-body parameter that are not part of its schema
_PARAMETER_ONLY_KEYS: Final = frozenset({"name", "in", "required", "description", "allowEmptyValue"})

_YAML_SUFFIXES: Final = frozenset({".yaml", ".yml"})

_PARAMETER_LOCATIONS: Final = {
    "path": ParameterLocation.PATH,
    "query": ParameterLocation.QUERY,
    "header": ParameterLocation.HEADER,
    "body": ParameterLocation.BODY,
    "formData": ParameterLocation.FORM,
}


def _is_json_content_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in JSON_COMPATIBLE_CONTENT_TYPES or media_type.endswith("+json")


def _preferred_content_type(content_types: list[str]) -> str | None:
    """Pick the JSON-compatible content type if one is declared, else the first one."""
    for content_type in content_types:
        if _is_json_content_type(content_type):
            return content_type
    return content_types[0] if content_types else None


class OASParser:
    """Parser for Swagger 2.0 and OpenAPI 3.x documents."""

    def __init__(self) -> None:
        self.spec_data: dict[str, Any] | None = None

    def parse_file(self, file_path: str | Path) -> Document:
        """Parse an API description from a JSON or YAML file."""
        path = Path(file_path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Cannot read {path}: {e}"
            raise DocumentLoadError(msg) from e

        try:
            data = yaml.safe_load(text) if path.suffix.lower() in _YAML_SUFFIXES else json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            msg = f"Cannot parse {path}: {e}"
            raise DocumentLoadError(msg) from e

        return self.parse_dict(data)

    def parse_dict(self, spec_dict: dict[str, Any]) -> Document:
        """Parse an API description from an already loaded mapping."""
        if not isinstance(spec_dict, dict) or not spec_dict:
            msg = "API description must be a non-empty mapping"
            raise DocumentLoadError(msg)
        self.spec_data = spec_dict
        return self._parse_spec()

    @property
    def spec(self) -> dict[str, Any]:
        if not self.spec_data:
            msg = "No specification data loaded"
            raise ValueError(msg)
        return self.spec_data

    @property
    def is_swagger2(self) -> bool:
        return str(self.spec.get("swagger", "")).startswith("2")

    @property
    def _schema_prefix(self) -> str:
        return SWAGGER_DEFINITIONS_PREFIX if self.is_swagger2 else OPENAPI_SCHEMAS_PREFIX

    def _parse_spec(self) -> Document:
        """Parse the loaded specification."""
        if "swagger" not in self.spec and "openapi" not in self.spec:
            msg = "Document declares neither 'swagger' nor 'openapi' version"
            raise DocumentLoadError(msg)

        builder = DocumentBuilder(self.spec.get("info", {}))
        definitions = self._schema_definitions()

        for name in definitions:
            builder.declare(self._schema_prefix + name, name)

        for name, schema_data in definitions.items():
            self._register_schema(builder, name, schema_data)

        for operation in self._parse_operations():
            builder.add_operation(operation)

        return builder.build()

    def _schema_definitions(self) -> dict[str, Any]:
        if self.is_swagger2:
            definitions = self.spec.get("definitions", {})
        else:
            definitions = self.spec.get("components", {}).get("schemas", {})
        if not isinstance(definitions, dict):
            msg = "Schema definitions must be a mapping"
            raise DocumentLoadError(msg)
        return definitions

    def _register_schema(self, builder: DocumentBuilder, name: str, schema_data: dict[str, Any]) -> None:
        key = self._schema_prefix + name
        node = self._parse_schema(schema_data, named=True)
        generic_parameters = schema_data.get("x-generic-parameters")
        if generic_parameters:
            builder.add_generic(key, node, list(generic_parameters), name)
        else:
            builder.add_schema(key, node, name)

    # Schemas

    def _schema_key(self, ref: str) -> str:
        """Normalise a discriminator mapping target into an identity key."""
        return ref if ref.startswith("#/") else self._schema_prefix + ref

    def _is_nullable(self, schema_data: dict[str, Any]) -> bool:
        schema_type = schema_data.get("type")
        return bool(
            schema_data.get("nullable")
            or schema_data.get("x-nullable")
            or (isinstance(schema_type, list) and "null" in schema_type)
        )

    def _parse_schema(self, schema_data: dict[str, Any] | None, *, named: bool = False) -> SchemaNode:
        """Convert a raw JSON Schema into a :class:`SchemaNode`."""
        if not schema_data:
            return SchemaNode.any_type()

        nullable = self._is_nullable(schema_data)
        description = schema_data.get("description")

        if "x-generic-parameter" in schema_data:
            bound = SchemaNode.reference(schema_data["$ref"]) if "$ref" in schema_data else None
            placeholder = SchemaNode.generic_placeholder(schema_data["x-generic-parameter"], bound)
            placeholder.nullable = nullable
            return placeholder

        if "$ref" in schema_data:
            arguments = [self._parse_schema(arg) for arg in schema_data.get("x-generic-arguments", [])]
            return SchemaNode.reference(schema_data["$ref"], arguments, nullable=nullable)

        if "allOf" in schema_data:
            return self._parse_all_of(schema_data, named=named)

        for union_key in ("oneOf", "anyOf"):
            if union_key in schema_data:
                variants = [self._parse_schema(variant) for variant in schema_data[union_key]]
                if len(variants) == 1 and not named:
                    variants[0].nullable = variants[0].nullable or nullable
                    return variants[0]
                return SchemaNode.union_type(variants, nullable=nullable, description=description)

        schema_type = schema_data.get("type")
        if isinstance(schema_type, list):
            schema_type = next((item for item in schema_type if item != "null"), None)

        if "enum" in schema_data:
            return self._parse_enum(schema_data, schema_type, nullable=nullable)

        if schema_type == "array" or "items" in schema_data:
            items = self._parse_schema(schema_data.get("items"))
            return SchemaNode.array_type(items, nullable=nullable, description=description)

        if schema_type == "object" or "properties" in schema_data or "additionalProperties" in schema_data:
            return self._parse_object(schema_data)

        if schema_type in _PRIMITIVE_TYPES:
            return SchemaNode.primitive_type(
                schema_type, schema_data.get("format"), nullable=nullable, description=description
            )

        return SchemaNode.any_type(nullable=nullable, description=description)

    def _parse_enum(self, schema_data: dict[str, Any], schema_type: str | None, *, nullable: bool) -> SchemaNode:
        values = [value for value in schema_data["enum"] if value is not None]
        match schema_type:
            case "integer" | "number":
                primitive = "number"
            case "boolean":
                primitive = "boolean"
            case _:
                primitive = "string"
        names = schema_data.get("x-enumNames") or schema_data.get("x-enum-varnames") or []
        return SchemaNode.enum_type(
            values,
            primitive,
            enum_names=[str(name) for name in names],
            nullable=nullable or None in schema_data["enum"],
            description=schema_data.get("description"),
        )

    def _parse_object(self, schema_data: dict[str, Any], base: SchemaNode | None = None) -> SchemaNode:
        required = set(schema_data.get("required", []))
        properties = [
            Property(
                name=prop_name,
                schema=self._parse_schema(prop_data),
                required=prop_name in required,
                description=(prop_data or {}).get("description"),
            )
            for prop_name, prop_data in schema_data.get("properties", {}).items()
        ]

        additional_node = None
        additional = schema_data.get("additionalProperties")
        if not properties and base is None:
            if isinstance(additional, dict):
                additional_node = self._parse_schema(additional)
            elif additional is True:
                additional_node = SchemaNode.any_type()

        discriminator, mapping = self._parse_discriminator(schema_data)
        return SchemaNode.object_type(
            properties,
            base=base,
            additional_properties=additional_node,
            discriminator=discriminator,
            discriminator_mapping=mapping,
            is_abstract=bool(schema_data.get("x-abstract", False)),
            nullable=self._is_nullable(schema_data),
            description=schema_data.get("description"),
        )

    def _parse_discriminator(self, schema_data: dict[str, Any]) -> tuple[str | None, dict[str, str]]:
        discriminator = schema_data.get("discriminator")
        if isinstance(discriminator, str):
            return discriminator, {}
        if isinstance(discriminator, dict) and "propertyName" in discriminator:
            mapping = {
                str(value): self._schema_key(target) for value, target in discriminator.get("mapping", {}).items()
            }
            return discriminator["propertyName"], mapping
        return None, {}

    def _parse_all_of(self, schema_data: dict[str, Any], *, named: bool) -> SchemaNode:
        """Handle ``allOf`` composition.

        The first ``$ref`` becomes the base type. Properties of further
        ``$ref`` members and of inline members are merged into the schema's
        own properties.
        """
        parts = schema_data["allOf"]
        references = [part for part in parts if "$ref" in part]
        inline_parts = [part for part in parts if "$ref" not in part]

        merged: dict[str, Any] = {
            key: value for key, value in schema_data.items() if key not in ("allOf", "properties", "required")
        }
        properties: dict[str, Any] = dict(schema_data.get("properties", {}))
        required: list[str] = list(schema_data.get("required", []))

        for extra in [*(self._resolve_schema_reference(ref["$ref"]) for ref in references[1:]), *inline_parts]:
            properties.update(extra.get("properties", {}))
            required.extend(extra.get("required", []))
            if "discriminator" in extra and "discriminator" not in merged:
                merged["discriminator"] = extra["discriminator"]

        base = self._parse_schema(references[0]) if references else None
        if base is not None and not properties and not named:
            base.nullable = base.nullable or self._is_nullable(schema_data)
            return base

        merged["properties"] = properties
        merged["required"] = required
        return self._parse_object(merged, base=base)

    def _resolve_reference(self, ref: str) -> dict[str, Any]:
        """Resolve a local JSON reference to the raw mapping it points at."""
        resolved: Any = self.spec
        for raw_part in ref.split("/")[1:]:  # Skip "#"
            part = raw_part.replace("~1", "/").replace("~0", "~")
            if not isinstance(resolved, dict) or part not in resolved:
                msg = f"Unresolved reference: {ref}"
                raise DocumentLoadError(msg)
            resolved = resolved[part]
        if not isinstance(resolved, dict):
            msg = f"Reference {ref} does not point at an object"
            raise DocumentLoadError(msg)
        return resolved

    def _resolve_schema_reference(self, ref: str) -> dict[str, Any]:
        """Resolve a reference to a named schema; a missing schema is reported by its identity key."""
        prefix = self._schema_prefix
        name = ref[len(prefix) :].replace("~1", "/").replace("~0", "~")
        if ref.startswith(prefix) and name not in self._schema_definitions():
            raise UnresolvedSchemaError(ref)
        return self._resolve_reference(ref)

    def _deref(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._resolve_reference(data["$ref"]) if "$ref" in data else data

    # Operations

    def _parse_operations(self) -> list[Operation]:
        """Parse all operations from paths."""
        operations: list[Operation] = []
        for path, raw_path_item in self.spec.get("paths", {}).items():
            path_item = self._deref(raw_path_item)
            path_parameters = path_item.get("parameters", [])
            for method, operation_data in path_item.items():
                if method.lower() in HTTP_METHODS:
                    operations.append(self._parse_operation(path, method, operation_data, path_parameters))
        return operations

    def _parse_operation(
        self,
        path: str,
        method: str,
        operation_data: dict[str, Any],
        path_parameters: list[dict[str, Any]],
    ) -> Operation:
        """Parse a single operation."""
        operation_id = operation_data.get("operationId")
        if not operation_id:
            operation_id = ts_method_name(f"{method} {ts_type_name(path)}")
            logger.debug("Operation %s %s has no operationId, using %s", method.upper(), path, operation_id)

        parameters = self._parse_parameters(path_parameters, operation_data.get("parameters", []))
        content_types: list[str] = []

        if self.is_swagger2:
            content_types = list(operation_data.get("consumes", self.spec.get("consumes", [])))
        elif "requestBody" in operation_data:
            body_parameters, content_types = self._parse_request_body(operation_data["requestBody"])
            parameters.extend(body_parameters)

        responses = {
            str(status_code): self._parse_response(str(status_code), response_data, operation_data)
            for status_code, response_data in operation_data.get("responses", {}).items()
        }

        return Operation(
            operation_id=operation_id,
            method=method,
            path=path,
            parameters=parameters,
            request_content_types=content_types,
            responses=responses,
            summary=operation_data.get("summary"),
            description=operation_data.get("description"),
            tags=list(operation_data.get("tags", [])),
            deprecated=bool(operation_data.get("deprecated", False)),
        )

    def _parse_parameters(
        self, path_parameters: list[dict[str, Any]], operation_parameters: list[dict[str, Any]]
    ) -> list[Parameter]:
        """Merge path-level and operation-level parameters; operation entries win."""
        merged: dict[tuple[str, str], dict[str, Any]] = {}
        for raw in [*path_parameters, *operation_parameters]:
            param_data = self._deref(raw)
            merged[(param_data.get("name", ""), param_data.get("in", "query"))] = param_data

        parameters = []
        for param_data in merged.values():
            param = self._parse_parameter(param_data)
            if param:
                parameters.append(param)
        return parameters

    def _parse_parameter(self, param_data: dict[str, Any]) -> Parameter | None:
        """Parse a parameter."""
        name = param_data.get("name")
        if not name:
            return None

        raw_location = param_data.get("in", "query")
        location = _PARAMETER_LOCATIONS.get(raw_location)
        if location is None:
            logger.warning("Skipping %s parameter '%s': location is not supported", raw_location, name)
            return None

        if "schema" in param_data:
            schema = self._parse_schema(param_data["schema"])
        else:
            schema = self._parse_schema({k: v for k, v in param_data.items() if k not in _PARAMETER_ONLY_KEYS})
        if param_data.get("x-nullable"):
            schema.nullable = True

        return Parameter(
            name=name,
            location=location,
            schema=schema,
            required=location is ParameterLocation.PATH or bool(param_data.get("required", False)),
            description=param_data.get("description"),
        )

    def _parse_request_body(self, request_body: dict[str, Any]) -> tuple[list[Parameter], list[str]]:
        """Translate an OpenAPI 3 ``requestBody`` into body or form parameters."""
        request_body = self._deref(request_body)
        content: dict[str, Any] = request_body.get("content", {})
        content_types = list(content)
        content_type = _preferred_content_type(content_types)
        if content_type is None:
            return [], content_types

        media = content[content_type] or {}
        raw_schema = media.get("schema")
        if content_type in FORM_CONTENT_TYPES and raw_schema is not None:
            form_schema = self._deref(raw_schema)
            if form_schema.get("properties"):
                required = set(form_schema.get("required", []))
                form_parameters = [
                    Parameter(
                        name=prop_name,
                        location=ParameterLocation.FORM,
                        schema=self._parse_schema(prop_data),
                        required=prop_name in required,
                        description=(prop_data or {}).get("description"),
                    )
                    for prop_name, prop_data in form_schema["properties"].items()
                ]
                return form_parameters, content_types

        if raw_schema is None and content_type == CONTENT_TYPE_OCTET_STREAM:
            schema = SchemaNode.primitive_type("string", "binary")
        else:
            schema = self._parse_schema(raw_schema)
        if request_body.get("x-nullable"):
            schema.nullable = True

        body = Parameter(
            name=request_body.get("x-name", "body"),
            location=ParameterLocation.BODY,
            schema=schema,
            required=bool(request_body.get("required", False)),
            description=request_body.get("description"),
        )
        return [body], content_types

    def _parse_response(
        self, status_code: str, response_data: dict[str, Any], operation_data: dict[str, Any]
    ) -> Response:
        """Parse a response."""
        response_data = self._deref(response_data)
        schema: SchemaNode | None = None

        if self.is_swagger2:
            content_types = list(operation_data.get("produces", self.spec.get("produces", [])))
            if "schema" in response_data:
                schema = self._parse_schema(response_data["schema"])
        else:
            content: dict[str, Any] = response_data.get("content", {})
            content_types = list(content)
            content_type = _preferred_content_type(content_types)
            if content_type is not None:
                media = content[content_type] or {}
                if "schema" in media:
                    schema = self._parse_schema(media["schema"])
                elif not _is_json_content_type(content_type):
                    schema = SchemaNode.primitive_type("string", "binary")

        if schema is not None and response_data.get("x-nullable"):
            schema.nullable = True

        return Response(
            status_code=status_code,
            description=response_data.get("description", ""),
            schema=schema,
            content_types=content_types,
        )
