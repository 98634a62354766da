"""
Response classification.

Declared responses become an ordered list of :class:`ResponseBranch` values:
literal status codes ascending, then status ranges such as ``2XX``, then
``default``. Each branch knows whether it resolves or rejects the generated
observable and which TypeScript condition selects it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Final

from ts_oas_generator.config import DefaultResponseSuccess, GenerationPolicy
from ts_oas_generator.constants import (
    DEFAULT_RESPONSE_KEY,
    SERVER_ERROR_MESSAGE,
    SUCCESS_RANGE_KEY,
    UNEXPECTED_ERROR_MESSAGE,
)
from ts_oas_generator.generator.type_resolver import TypeReference, TypeResolver
from ts_oas_generator.model import Response

logger = logging.getLogger(__name__)

_LITERAL_STATUS_PATTERN: Final = re.compile(r"^[1-5]\d\d$")
_RANGE_STATUS_PATTERN: Final = re.compile(r"^[1-5]XX$", re.IGNORECASE)


@dataclass
class ResponseBranch:
    """One arm of the generated status dispatch."""

    status_code: str
    schema_type: TypeReference | None
    is_success: bool
    description: str = ""
    condition: str | None = field(init=False)

    def __post_init__(self) -> None:
        self.status_code = self.status_code.upper() if self.is_range else self.status_code
        if self.is_default:
            self.condition = None
        elif self.is_range:
            low = int(self.status_code[0]) * 100
            self.condition = f"status >= {low} && status < {low + 100}"
        else:
            self.condition = f"status === {self.status_code}"

    @property
    def is_default(self) -> bool:
        return self.status_code == DEFAULT_RESPONSE_KEY

    @property
    def is_range(self) -> bool:
        return bool(_RANGE_STATUS_PATTERN.match(self.status_code))

    @property
    def is_file(self) -> bool:
        return self.schema_type is not None and self.schema_type.is_file

    @property
    def result_variable(self) -> str:
        suffix = "Default" if self.is_default else self.status_code
        return f"result{suffix}"

    @property
    def data_variable(self) -> str:
        suffix = "Default" if self.is_default else self.status_code
        return f"resultData{suffix}"

    @property
    def error_message(self) -> str:
        return self.description or SERVER_ERROR_MESSAGE

    @property
    def negated_condition(self) -> str:
        if self.is_range:
            low = int(self.status_code[0]) * 100
            return f"(status < {low} || status >= {low + 100})"
        return f"status !== {self.status_code}"


@dataclass
class ResponsePlan:
    """Everything the emitter needs to build a ``process*`` method."""

    branches: list[ResponseBranch]
    return_type: str
    unexpected_condition: str | None
    unexpected_message: str = UNEXPECTED_ERROR_MESSAGE

    @property
    def has_default(self) -> bool:
        return any(branch.is_default for branch in self.branches)

    @property
    def conditional_branches(self) -> list[ResponseBranch]:
        return [branch for branch in self.branches if not branch.is_default]

    @property
    def default_branch(self) -> ResponseBranch | None:
        return next((branch for branch in self.branches if branch.is_default), None)

    @property
    def success_branches(self) -> list[ResponseBranch]:
        return [branch for branch in self.branches if branch.is_success]

    @property
    def returns_file(self) -> bool:
        return any(branch.is_file for branch in self.success_branches)


def _is_success_code(status_code: str) -> bool:
    if _LITERAL_STATUS_PATTERN.match(status_code):
        return 200 <= int(status_code) < 300  # noqa: PLR2004
    return status_code.upper() == SUCCESS_RANGE_KEY


def _sort_key(status_code: str) -> tuple[int, int]:
    if _LITERAL_STATUS_PATTERN.match(status_code):
        return 0, int(status_code)
    if _RANGE_STATUS_PATTERN.match(status_code):
        return 1, int(status_code[0])
    return 2, 0


class ResponseStrategyResolver:
    """Classify the declared responses of an operation."""

    def __init__(self, type_resolver: TypeResolver, policy: GenerationPolicy) -> None:
        self.type_resolver = type_resolver
        self.policy = policy

    def classify(self, responses: dict[str, Response]) -> list[ResponseBranch]:
        if not responses:
            return [ResponseBranch(SUCCESS_RANGE_KEY, None, is_success=True)]

        usable: list[Response] = []
        for status_code, response in responses.items():
            if (
                status_code == DEFAULT_RESPONSE_KEY
                or _LITERAL_STATUS_PATTERN.match(status_code)
                or _RANGE_STATUS_PATTERN.match(status_code)
            ):
                usable.append(response)
            else:
                logger.warning("Ignoring response with unsupported status code '%s'", status_code)

        has_success = any(_is_success_code(response.status_code) for response in usable)
        branches = []
        for response in sorted(usable, key=lambda item: _sort_key(item.status_code)):
            schema_type = (
                self.type_resolver.resolve_response(response.schema) if response.schema is not None else None
            )
            branches.append(
                ResponseBranch(
                    response.status_code,
                    schema_type,
                    is_success=self._is_success(response, has_success=has_success),
                    description=response.description,
                )
            )
        return branches

    def _is_success(self, response: Response, *, has_success: bool) -> bool:
        if not response.is_default:
            return _is_success_code(response.status_code)
        match self.policy.default_response_success:
            case DefaultResponseSuccess.ALWAYS:
                return True
            case DefaultResponseSuccess.WHEN_NO_SUCCESS:
                return not has_success
            case _:
                return False

    def plan(self, responses: dict[str, Response]) -> ResponsePlan:
        branches = self.classify(responses)
        conditional = [branch for branch in branches if not branch.is_default]
        has_default = len(conditional) != len(branches)
        unexpected = None
        if not has_default and conditional:
            unexpected = " && ".join(branch.negated_condition for branch in conditional)
        return ResponsePlan(branches, self.return_type(branches), unexpected)

    @staticmethod
    def return_type(branches: list[ResponseBranch]) -> str:
        """Union of the distinct success payload types, ``void`` when there are none."""
        types: list[str] = []
        for branch in branches:
            if not branch.is_success or branch.schema_type is None:
                continue
            if branch.is_file:
                return "FileResponse"
            if branch.schema_type.rendered not in types:
                types.append(branch.schema_type.rendered)
        return " | ".join(types) if types else "void"
