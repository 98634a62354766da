"""
Generation policy for the TypeScript client generator.

The policy can be built in code, loaded from the ``[generator]`` table of a
TOML file and overridden by command line arguments.
"""

import argparse
import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Final

import toml

from ts_oas_generator.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_SECTION: Final = "generator"


class TemplateStyle(str, Enum):
    ANGULAR = "angular"


class DateType(str, Enum):
    DATE = "Date"
    STRING = "string"


class DefaultResponseSuccess(str, Enum):
    """When a ``default`` response is treated as a success."""

    NEVER = "never"
    WHEN_NO_SUCCESS = "when-no-success"
    ALWAYS = "always"


class OperationGrouping(str, Enum):
    """How operations are distributed over client classes."""

    OPERATION_ID = "operation-id"
    FIRST_TAG = "first-tag"
    SINGLE_CLIENT = "single-client"


_ENUM_FIELDS: Final = {
    "template": TemplateStyle,
    "date_type": DateType,
    "default_response_success": DefaultResponseSuccess,
    "operation_grouping": OperationGrouping,
}
_VERSION_FIELDS: Final = frozenset({"typescript_version", "rxjs_version"})
_BOOL_FIELDS: Final = frozenset({"export_types", "generate_client_interfaces", "generate_dto_types"})


@dataclass(frozen=True)
class GenerationPolicy:
    """Options that control the shape of the generated client."""

    template: TemplateStyle = TemplateStyle.ANGULAR
    typescript_version: float = 2.7
    rxjs_version: float = 6.0
    export_types: bool = True
    generate_client_interfaces: bool = False
    generate_dto_types: bool = True
    date_type: DateType = DateType.DATE
    default_response_success: DefaultResponseSuccess = DefaultResponseSuccess.WHEN_NO_SUCCESS
    operation_grouping: OperationGrouping = OperationGrouping.OPERATION_ID
    client_class_name: str = "{controller}Client"
    base_url_token: str = "API_BASE_URL"

    def __post_init__(self) -> None:
        if "{controller}" not in self.client_class_name:
            msg = "client_class_name must contain the '{controller}' placeholder"
            raise ConfigurationError(msg)

    @property
    def effective_date_type(self) -> DateType:
        """Dates cannot be revived without DTO classes, so they stay strings."""
        return self.date_type if self.generate_dto_types else DateType.STRING

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "GenerationPolicy":
        """Build a policy from plain values, validating names and enum members."""
        known = {policy_field.name for policy_field in dataclasses.fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            msg = f"Unknown generator option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        return cls(**{name: _coerce(name, value) for name, value in values.items()})

    @classmethod
    def from_file(cls, config_path: str | Path) -> "GenerationPolicy":
        """Load the ``[generator]`` table of a TOML file."""
        path = Path(config_path)
        try:
            config_data = toml.load(path)
        except (OSError, toml.TomlDecodeError) as e:
            msg = f"Cannot load configuration {path}: {e}"
            raise ConfigurationError(msg) from e

        section = config_data.get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            msg = f"[{CONFIG_SECTION}] in {path} must be a table"
            raise ConfigurationError(msg)
        logger.debug("Loaded %d generator option(s) from %s", len(section), path)
        return cls.from_mapping(section)

    def to_mapping(self) -> dict[str, Any]:
        return {
            name: value.value if isinstance(value, Enum) else value
            for name, value in dataclasses.asdict(self).items()
        }

    def save_to_file(self, config_path: str | Path) -> None:
        """Write the policy as a ``[generator]`` table."""
        with Path(config_path).open("w", encoding="utf-8") as f:
            toml.dump({CONFIG_SECTION: self.to_mapping()}, f)

    def merge_with_args(self, args: argparse.Namespace) -> "GenerationPolicy":
        """Override policy values with command line arguments that were given."""
        overrides = {
            policy_field.name: _coerce(policy_field.name, getattr(args, policy_field.name))
            for policy_field in dataclasses.fields(self)
            if getattr(args, policy_field.name, None) is not None
        }
        return dataclasses.replace(self, **overrides)


def _coerce(name: str, value: Any) -> Any:  # noqa: ANN401
    if name in _ENUM_FIELDS:
        enum_type = _ENUM_FIELDS[name]
        try:
            return enum_type(value)
        except ValueError:
            choices = ", ".join(member.value for member in enum_type)
            msg = f"Invalid value for {name}: {value!r} (expected one of {choices})"
            raise ConfigurationError(msg) from None
    if name in _VERSION_FIELDS:
        try:
            return float(value)
        except (TypeError, ValueError):
            msg = f"Invalid version for {name}: {value!r}"
            raise ConfigurationError(msg) from None
    if name in _BOOL_FIELDS and not isinstance(value, bool):
        msg = f"Invalid value for {name}: {value!r} (expected true or false)"
        raise ConfigurationError(msg)
    return value
