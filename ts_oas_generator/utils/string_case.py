"""
String case conversion utilities for TypeScript client generation.

This module provides string case conversion utilities with specific support
for TypeScript naming conventions and reserved word handling.

Based on https://github.com/okunishinishi/python-stringcase
with additional TypeScript-specific naming conventions.
"""

import re
from collections.abc import Callable
from typing import Final

# Regex patterns for identifier conversion
_NON_IDENTIFIER_PATTERN: Final = re.compile(r"[^a-zA-Z0-9_$]")
_WORD_SPLIT_PATTERN: Final = re.compile(r"[^a-zA-Z0-9]+")
_VALID_IDENTIFIER_PATTERN: Final = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")

# Reserved TypeScript words that cannot be used as variable names
TYPESCRIPT_RESERVED_WORDS: Final = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "null",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        # Strict mode reserved words
        "implements",
        "interface",
        "let",
        "package",
        "private",
        "protected",
        "public",
        "static",
        "yield",
        # Contextual words that collide with generated code
        "any",
        "boolean",
        "number",
        "string",
        "symbol",
        "type",
        "of",
    }
)


def _convert_if_not_empty(string: str | None, conversion_func: Callable[[str], str]) -> str:
    """Safely convert a string, returning empty string if input is None or empty."""
    return conversion_func(string) if string else ""


def capitalcase(string: str | None) -> str:
    """Convert string into capital case (first letter uppercase).

    Examples:
        >>> capitalcase("hello world")
        'Hello world'
    """

    def _capitalcase(s: str) -> str:
        return s[0].upper() + s[1:]

    return _convert_if_not_empty(string, _capitalcase)


def lower_first(string: str | None) -> str:
    """Lowercase only the first character, leaving the rest untouched.

    Examples:
        >>> lower_first("AddMessage")
        'addMessage'
        >>> lower_first("URL")
        'uRL'
    """

    def _lower_first(s: str) -> str:
        return s[0].lower() + s[1:]

    return _convert_if_not_empty(string, _lower_first)


# TypeScript-specific naming utilities


def ts_type_name(name: str | None) -> str:
    """Convert a declared schema or client name into a TypeScript type name.

    The casing inside each word is kept, so
    ``UserDTO`` stays ``UserDTO``. Separators are dropped and the first
    letter of every word is uppercased.

    Examples:
        >>> ts_type_name("GenericRequestBaseOfRequestBody")
        'GenericRequestBaseOfRequestBody'
        >>> ts_type_name("my.api-Response")
        'MyApiResponse'
        >>> ts_type_name("2fa")
        '_2fa'
    """

    def _type_name(s: str) -> str:
        words = [word for word in _WORD_SPLIT_PATTERN.split(s) if word]
        joined = "".join(capitalcase(word) for word in words)
        if not joined:
            return "Anonymous"
        return f"_{joined}" if joined[0].isdigit() else joined

    return _convert_if_not_empty(name, _type_name)


def ts_method_name(name: str | None) -> str:
    """Convert an operation name into a TypeScript method name.

    Examples:
        >>> ts_method_name("AddMessage")
        'addMessage'
        >>> ts_method_name("get-user_by_id")
        'getUserById'
    """
    return lower_first(ts_type_name(name)) if name else ""


def ts_property_name(name: str | None) -> str:
    """Convert a JSON property name into a TypeScript class member name.

    Examples:
        >>> ts_property_name("Bar")
        'bar'
        >>> ts_property_name("first-name")
        'firstName'
    """
    if not name:
        return ""
    if _VALID_IDENTIFIER_PATTERN.match(name):
        return lower_first(name)
    return ts_method_name(name)


def ts_variable_name(name: str | None) -> str:
    """Convert a parameter name into a safe TypeScript variable name.

    Examples:
        >>> ts_variable_name("message-id")
        'messageId'
        >>> ts_variable_name("delete")
        'delete_'
    """
    if not name:
        return ""
    variable = ts_property_name(name)
    variable = _NON_IDENTIFIER_PATTERN.sub("_", variable)
    return escape_reserved_word(variable)


def ts_enum_member_name(value: object) -> str:
    """Generate an enum member name from an enum value.

    Examples:
        >>> ts_enum_member_name("in-progress")
        'InProgress'
        >>> ts_enum_member_name(1)
        '_1'
    """
    text = str(value)
    if isinstance(value, bool) or not text:
        return ts_type_name(text) or "Empty"
    return ts_type_name(text)


def escape_reserved_word(name: str) -> str:
    """Escape TypeScript reserved words with a trailing underscore.

    Examples:
        >>> escape_reserved_word("default")
        'default_'
        >>> escape_reserved_word("name")
        'name'
    """
    return f"{name}_" if name in TYPESCRIPT_RESERVED_WORDS else name


def quote_property_key(name: str) -> str:
    """Quote a property key for structural types when it is not a plain identifier.

    Examples:
        >>> quote_property_key("bar")
        'bar'
        >>> quote_property_key("first-name")
        '"first-name"'
    """
    return name if _VALID_IDENTIFIER_PATTERN.match(name) else f'"{name}"'
