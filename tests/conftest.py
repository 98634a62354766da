"""Shared API description fixtures."""

import copy
from typing import Any

import pytest

FOO_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"Bar": {"type": "string"}},
}

_DISCUSSION_SPEC: dict[str, Any] = {
    "swagger": "2.0",
    "info": {"title": "Discussion API", "version": "1.0.0"},
    "consumes": ["application/json"],
    "produces": ["application/json"],
    "paths": {
        "/Discussion/AddMessage": {
            "post": {
                "tags": ["Discussion"],
                "operationId": "Discussion_AddMessage",
                "parameters": [
                    {
                        "name": "message",
                        "in": "body",
                        "required": True,
                        "schema": {"$ref": "#/definitions/Foo"},
                    }
                ],
                "responses": {"204": {"description": ""}},
            }
        },
        "/Discussion/GenericRequestTest1": {
            "post": {
                "tags": ["Discussion"],
                "operationId": "Discussion_GenericRequestTest1",
                "parameters": [
                    {
                        "name": "request",
                        "in": "body",
                        "required": True,
                        "schema": {"$ref": "#/definitions/GenericRequest1"},
                    }
                ],
                "responses": {"204": {"description": ""}},
            }
        },
        "/Discussion/GenericRequestTest2": {
            "post": {
                "tags": ["Discussion"],
                "operationId": "Discussion_GenericRequestTest2",
                "parameters": [
                    {
                        "name": "request",
                        "in": "body",
                        "required": True,
                        "schema": {"$ref": "#/definitions/GenericRequest2"},
                    }
                ],
                "responses": {"204": {"description": ""}},
            }
        },
    },
    "definitions": {
        "Foo": FOO_SCHEMA,
        "GenericRequest1": {
            "allOf": [
                {
                    "$ref": "#/definitions/GenericRequestBase",
                    "x-generic-arguments": [{"$ref": "#/definitions/RequestBodyBase"}],
                }
            ]
        },
        "GenericRequest2": {
            "allOf": [
                {
                    "$ref": "#/definitions/GenericRequestBase",
                    "x-generic-arguments": [{"$ref": "#/definitions/RequestBody"}],
                }
            ]
        },
        "GenericRequestBase": {
            "type": "object",
            "x-generic-parameters": ["T"],
            "required": ["Request"],
            "properties": {
                "Request": {"x-generic-parameter": "T", "$ref": "#/definitions/RequestBodyBase"},
            },
        },
        "RequestBodyBase": {"type": "object"},
        "RequestBody": {"allOf": [{"$ref": "#/definitions/RequestBodyBase"}]},
    },
}

_COMPLEX_SPEC: dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {"title": "Complex API", "version": "1.0.0"},
    "paths": {
        "/Complex/RequestWithMultipleSuccess": {
            "post": {
                "tags": ["Complex"],
                "operationId": "Complex_RequestWithMultipleSuccess",
                "requestBody": {
                    "x-name": "message",
                    "required": True,
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Foo"}}},
                },
                "responses": {
                    "200": {
                        "description": "",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Foo"}}},
                    },
                    "204": {"description": ""},
                },
            }
        }
    },
    "components": {"schemas": {"Foo": FOO_SCHEMA}},
}

_URL_ENCODED_SPEC: dict[str, Any] = {
    "swagger": "2.0",
    "info": {"title": "Url encoded API", "version": "1.0.0"},
    "paths": {
        "/api/UrlEncodedRequestConsuming": {
            "post": {
                "tags": ["UrlEncodedRequestConsuming"],
                "operationId": "UrlEncodedRequestConsuming_AddMessage",
                "consumes": ["application/x-www-form-urlencoded"],
                "parameters": [
                    {"name": "message", "in": "formData", "schema": {"$ref": "#/definitions/Foo"}},
                    {"name": "messageId", "in": "formData", "type": "string"},
                ],
                "responses": {"204": {"description": ""}},
            }
        }
    },
    "definitions": {"Foo": FOO_SCHEMA},
}

_PETSTORE_SPEC: dict[str, Any] = {
    "openapi": "3.0.1",
    "info": {"title": "Pet store", "version": "2.1.0"},
    "paths": {
        "/pets/{petId}": {
            "parameters": [{"name": "petId", "in": "path", "required": True, "schema": {"type": "integer"}}],
            "get": {
                "operationId": "Pets_GetPet",
                "parameters": [
                    {"name": "since", "in": "query", "schema": {"type": "string", "format": "date-time"}},
                    {"name": "X-Trace", "in": "header", "schema": {"type": "string"}},
                    {"name": "session", "in": "cookie", "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "description": "The pet",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
                    },
                    "404": {
                        "description": "Pet not found",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Problem"}}},
                    },
                },
            },
        },
        "/pets": {
            "get": {
                "operationId": "Pets_ListPets",
                "parameters": [
                    {"name": "tags", "in": "query", "schema": {"type": "array", "items": {"type": "string"}}},
                ],
                "responses": {
                    "200": {
                        "description": "",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}
                            }
                        },
                    },
                    "default": {"description": "Unexpected error"},
                },
            },
        },
        "/pets/{petId}/photo": {
            "get": {
                "operationId": "Photos_Download",
                "parameters": [{"name": "petId", "in": "path", "required": True, "schema": {"type": "integer"}}],
                "responses": {"200": {"description": "", "content": {"image/png": {}}}},
            },
            "put": {
                "operationId": "Photos_Upload",
                "parameters": [{"name": "petId", "in": "path", "required": True, "schema": {"type": "integer"}}],
                "requestBody": {
                    "content": {
                        "multipart/form-data": {
                            "schema": {
                                "type": "object",
                                "required": ["file"],
                                "properties": {
                                    "file": {"type": "string", "format": "binary"},
                                    "caption": {"type": "string"},
                                },
                            }
                        }
                    }
                },
                "responses": {"204": {"description": ""}},
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "x-abstract": True,
                "required": ["name", "petType"],
                "discriminator": {"propertyName": "petType"},
                "properties": {
                    "name": {"type": "string"},
                    "petType": {"type": "string"},
                    "born": {"type": "string", "format": "date"},
                    "owner": {"$ref": "#/components/schemas/Owner"},
                },
            },
            "Cat": {
                "allOf": [
                    {"$ref": "#/components/schemas/Pet"},
                    {"type": "object", "properties": {"lives": {"type": "integer"}}},
                ]
            },
            "Dog": {
                "allOf": [
                    {"$ref": "#/components/schemas/Pet"},
                    {
                        "type": "object",
                        "required": ["toys"],
                        "properties": {"toys": {"type": "array", "items": {"$ref": "#/components/schemas/Toy"}}},
                    },
                ]
            },
            "Toy": {"type": "object", "properties": {"label": {"type": "string"}}},
            "Owner": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "pets": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
                },
            },
            "Problem": {"type": "object", "properties": {"title": {"type": "string"}}},
            "Size": {
                "type": "string",
                "enum": ["small", "medium-large"],
            },
            "Priority": {
                "type": "integer",
                "enum": [1, 2],
                "x-enumNames": ["Low", "High"],
            },
        }
    },
}


@pytest.fixture
def discussion_spec() -> dict[str, Any]:
    """Swagger 2.0 description of the discussion controller, including generic requests."""
    return copy.deepcopy(_DISCUSSION_SPEC)


@pytest.fixture
def complex_spec() -> dict[str, Any]:
    """OpenAPI 3 description with a 200 payload and a 204 no-content success."""
    return copy.deepcopy(_COMPLEX_SPEC)


@pytest.fixture
def url_encoded_spec() -> dict[str, Any]:
    """Swagger 2.0 description consuming application/x-www-form-urlencoded."""
    return copy.deepcopy(_URL_ENCODED_SPEC)


@pytest.fixture
def petstore_spec() -> dict[str, Any]:
    """OpenAPI 3 description with inheritance, enums, files and mixed parameter locations."""
    return copy.deepcopy(_PETSTORE_SPEC)


@pytest.fixture
def no_response_spec() -> dict[str, Any]:
    """OpenAPI 3 description whose JSON body operation declares no responses."""
    spec = copy.deepcopy(_COMPLEX_SPEC)
    spec["paths"]["/Complex/RequestWithMultipleSuccess"]["post"]["responses"] = {}
    return spec
