"""Shared constants for the TypeScript OAS generator."""

from typing import Final

# HTTP methods supported by OpenAPI
HTTP_METHODS: Final = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Identity key prefixes for declared schemas
SWAGGER_DEFINITIONS_PREFIX: Final = "#/definitions/"
OPENAPI_SCHEMAS_PREFIX: Final = "#/components/schemas/"

# Content types
CONTENT_TYPE_JSON: Final = "application/json"
CONTENT_TYPE_URL_ENCODED: Final = "application/x-www-form-urlencoded"
CONTENT_TYPE_MULTIPART: Final = "multipart/form-data"
CONTENT_TYPE_OCTET_STREAM: Final = "application/octet-stream"
JSON_COMPATIBLE_CONTENT_TYPES: Final = frozenset({"application/json", "text/json", "application/*+json"})
FORM_CONTENT_TYPES: Final = frozenset({CONTENT_TYPE_URL_ENCODED, CONTENT_TYPE_MULTIPART})

# Status code keys
DEFAULT_RESPONSE_KEY: Final = "default"
SUCCESS_RANGE_KEY: Final = "2XX"

# Schema formats mapped to Date
DATE_FORMATS: Final = frozenset({"date", "date-time"})
BINARY_FORMATS: Final = frozenset({"binary"})

# Primitive schema types mapped to TypeScript
TYPESCRIPT_PRIMITIVES: Final = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
}

# TypeScript language features and the version that introduced them
TS_STRING_ENUMS: Final = 2.4
TS_DEFINITE_ASSIGNMENT: Final = 2.7
TS_NULLISH_COALESCING: Final = 3.7
TS_OVERRIDE_MODIFIER: Final = 4.3

# RxJS releases that changed the emitted combinator style
RXJS_PIPEABLE_OPERATORS: Final = 6.0
RXJS_THROW_ERROR_FACTORY: Final = 7.0

# Messages used by the generated exception helpers
UNEXPECTED_ERROR_MESSAGE: Final = "An unexpected server error occurred."
SERVER_ERROR_MESSAGE: Final = "A server side error occurred."

GENERATOR_NAME: Final = "ts-oas-generator"
