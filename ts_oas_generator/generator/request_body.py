"""
Request body construction strategy.

Chooses how a generated method turns its parameters into an HTTP request
body, based on where the parameters are bound and which content types the
operation declares.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ts_oas_generator.constants import (
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_MULTIPART,
    CONTENT_TYPE_OCTET_STREAM,
    CONTENT_TYPE_URL_ENCODED,
    JSON_COMPATIBLE_CONTENT_TYPES,
)
from ts_oas_generator.model import Operation, Parameter

logger = logging.getLogger(__name__)


class BodyKind(str, Enum):
    NONE = "none"
    JSON = "json"
    URL_ENCODED = "url-encoded"
    MULTIPART = "multipart"
    BINARY = "binary"


@dataclass
class BodyConstructionPlan:
    """How the request body of one operation is built."""

    kind: BodyKind
    content_type: str | None = None
    body_parameter: Parameter | None = None
    form_parameters: list[Parameter] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_body(self) -> bool:
        return self.kind is not BodyKind.NONE


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def _is_json_compatible(content_type: str) -> bool:
    media_type = _media_type(content_type)
    return media_type in JSON_COMPATIBLE_CONTENT_TYPES or media_type.endswith("+json")


class RequestBodyStrategyResolver:
    """Select the body construction plan for an operation."""

    def plan(self, operation: Operation) -> BodyConstructionPlan:
        declared = [_media_type(content_type) for content_type in operation.request_content_types]
        form_parameters = operation.form_parameters
        body_parameter = operation.body_parameter

        if form_parameters:
            warnings = []
            if body_parameter is not None:
                warnings.append(
                    self._warn(f"Operation {operation.operation_id} mixes body and form parameters; body is ignored")
                )
            if CONTENT_TYPE_URL_ENCODED in declared:
                return BodyConstructionPlan(
                    BodyKind.URL_ENCODED, CONTENT_TYPE_URL_ENCODED, form_parameters=form_parameters, warnings=warnings
                )
            if declared and CONTENT_TYPE_MULTIPART not in declared:
                warnings.append(
                    self._warn(
                        f"Operation {operation.operation_id} declares {', '.join(declared)} for form parameters; "
                        "sending multipart/form-data"
                    )
                )
            return BodyConstructionPlan(BodyKind.MULTIPART, form_parameters=form_parameters, warnings=warnings)

        if body_parameter is None:
            return BodyConstructionPlan(BodyKind.NONE)

        if not declared or any(_is_json_compatible(content_type) for content_type in declared):
            return BodyConstructionPlan(BodyKind.JSON, CONTENT_TYPE_JSON, body_parameter=body_parameter)

        if CONTENT_TYPE_OCTET_STREAM in declared:
            return BodyConstructionPlan(BodyKind.BINARY, CONTENT_TYPE_OCTET_STREAM, body_parameter=body_parameter)

        warning = self._warn(
            f"Operation {operation.operation_id} declares unsupported request content type(s) "
            f"{', '.join(declared)}; falling back to JSON"
        )
        return BodyConstructionPlan(
            BodyKind.JSON, CONTENT_TYPE_JSON, body_parameter=body_parameter, warnings=[warning]
        )

    @staticmethod
    def _warn(message: str) -> str:
        logger.warning(message)
        return message
