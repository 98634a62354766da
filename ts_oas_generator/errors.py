"""Exceptions raised by the generator."""


class GenerationError(Exception):
    """Base class for errors that abort a generation run."""


class UnresolvedSchemaError(GenerationError):
    """A schema reference points at an identity key with no registry entry."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unresolved schema reference: {key}")


class DocumentLoadError(GenerationError):
    """The API description could not be read or is not a JSON/YAML mapping."""


class ConfigurationError(GenerationError):
    """The generation policy contains unknown keys or invalid values."""
