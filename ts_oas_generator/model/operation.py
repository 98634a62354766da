"""Operation model: one HTTP endpoint with its parameters and responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ts_oas_generator.constants import DEFAULT_RESPONSE_KEY
from ts_oas_generator.model.schema import SchemaNode
from ts_oas_generator.utils.string_case import ts_variable_name


class ParameterLocation(str, Enum):
    """Where a parameter value is bound in the HTTP request."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"
    FORM = "form"


@dataclass
class Parameter:
    """Represents an operation parameter."""

    name: str
    location: ParameterLocation
    schema: SchemaNode
    required: bool = False
    description: str | None = None
    variable_name: str = field(init=False)

    def __post_init__(self) -> None:
        self.variable_name = ts_variable_name(self.name)

    @property
    def is_body(self) -> bool:
        return self.location is ParameterLocation.BODY

    @property
    def is_form(self) -> bool:
        return self.location is ParameterLocation.FORM


@dataclass
class Response:
    """Represents a declared response of an operation."""

    status_code: str
    description: str = ""
    schema: SchemaNode | None = None
    content_types: list[str] = field(default_factory=list)

    @property
    def is_default(self) -> bool:
        return self.status_code == DEFAULT_RESPONSE_KEY


@dataclass
class Operation:
    """Represents an API operation."""

    operation_id: str
    method: str
    path: str
    parameters: list[Parameter] = field(default_factory=list)
    request_content_types: list[str] = field(default_factory=list)
    responses: dict[str, Response] = field(default_factory=dict)
    summary: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    deprecated: bool = False

    def __post_init__(self) -> None:
        self.method = self.method.lower()

    def parameters_in(self, *locations: ParameterLocation) -> list[Parameter]:
        """Parameters bound to any of ``locations``, in declaration order."""
        return [param for param in self.parameters if param.location in locations]

    @property
    def body_parameter(self) -> Parameter | None:
        return next((param for param in self.parameters if param.is_body), None)

    @property
    def form_parameters(self) -> list[Parameter]:
        return self.parameters_in(ParameterLocation.FORM)

    def iter_schemas(self) -> list[SchemaNode]:
        """Every schema node referenced directly by this operation."""
        schemas = [param.schema for param in self.parameters]
        schemas.extend(response.schema for response in self.responses.values() if response.schema is not None)
        return schemas
