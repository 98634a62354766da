"""
JSON value conversion snippets.

DTO classes revive nested DTOs and dates in ``init``/``fromJS`` and flatten
them again in ``toJSON``; client methods revive response payloads the same
way. Each helper returns TypeScript lines with relative indentation; the
templates place them at the right depth.
"""

from __future__ import annotations

from ts_oas_generator.generator.type_resolver import TypeCategory, TypeReference

_INDENT = "    "


def _member(target: str, name: str) -> str:
    return f'{target}["{name}"]'


def revive_value(expression: str, resolved: TypeReference) -> str:
    """Expression turning one JSON value into its runtime representation."""
    match resolved.category:
        case TypeCategory.CLASS:
            return f"{resolved.name}.fromJS({expression})"
        case TypeCategory.DATE:
            return f"new Date({expression}.toString())"
        case _:
            return expression


def serialize_value(expression: str, resolved: TypeReference) -> str:
    """Expression turning one runtime value back into JSON."""
    match resolved.category:
        case TypeCategory.CLASS:
            return f"{expression}.toJSON()"
        case TypeCategory.DATE:
            return f"{expression}.toISOString()"
        case _:
            return expression


def init_lines(name: str, member: str, resolved: TypeReference, initializer: str | None = None) -> list[str]:
    """Lines of ``init(_data)`` assigning JSON property ``name`` to ``this.<member>``."""
    source = _member("_data", name)
    target = f"this.{member}"
    fallback = initializer or "<any>undefined"

    match resolved.category:
        case TypeCategory.CLASS | TypeCategory.DATE:
            return [f"{target} = {source} ? {revive_value(source, resolved)} : {fallback};"]
        case TypeCategory.ARRAY if resolved.needs_conversion and resolved.item is not None:
            lines = [
                f"if (Array.isArray({source})) {{",
                f"{_INDENT}{target} = [] as any;",
                f"{_INDENT}for (let item of {source})",
                f"{_INDENT * 2}{target}!.push({revive_value('item', resolved.item)});",
                "}",
            ]
            if initializer:
                lines.extend(["else {", f"{_INDENT}{target} = {initializer};", "}"])
            return lines
        case TypeCategory.DICTIONARY if resolved.needs_conversion and resolved.item is not None:
            lines = [
                f"if ({source}) {{",
                f"{_INDENT}{target} = {{}} as any;",
                f"{_INDENT}for (let key in {source}) {{",
                f"{_INDENT * 2}if ({source}.hasOwnProperty(key))",
                f"{_INDENT * 3}(<any>{target})![key] = {source}[key] ? "
                f"{revive_value(f'{source}[key]', resolved.item)} : <any>undefined;",
                f"{_INDENT}}}",
                "}",
            ]
            if initializer:
                lines.extend(["else {", f"{_INDENT}{target} = {initializer};", "}"])
            return lines
        case _ if initializer:
            return [f"{target} = {source} !== undefined ? {source} : {initializer};"]
        case _:
            return [f"{target} = {source};"]


def to_json_lines(name: str, member: str, resolved: TypeReference) -> list[str]:
    """Lines of ``toJSON(data)`` writing ``this.<member>`` to JSON property ``name``."""
    target = _member("data", name)
    source = f"this.{member}"

    match resolved.category:
        case TypeCategory.CLASS | TypeCategory.DATE:
            return [f"{target} = {source} ? {serialize_value(source, resolved)} : <any>undefined;"]
        case TypeCategory.ARRAY if resolved.needs_conversion and resolved.item is not None:
            return [
                f"if (Array.isArray({source})) {{",
                f"{_INDENT}{target} = [];",
                f"{_INDENT}for (let item of {source})",
                f"{_INDENT * 2}{target}.push({serialize_value('item', resolved.item)});",
                "}",
            ]
        case TypeCategory.DICTIONARY if resolved.needs_conversion and resolved.item is not None:
            return [
                f"if ({source}) {{",
                f"{_INDENT}{target} = {{}};",
                f"{_INDENT}for (let key in {source}) {{",
                f"{_INDENT * 2}if ({source}.hasOwnProperty(key))",
                f"{_INDENT * 3}(<any>{target})[key] = {source}[key] ? "
                f"{serialize_value(f'(<any>{source})[key]', resolved.item)} : <any>undefined;",
                f"{_INDENT}}}",
                "}",
            ]
        case _:
            return [f"{target} = {source};"]


def response_lines(result: str, data: str, resolved: TypeReference) -> list[str]:
    """Lines reviving the parsed response body ``data`` into ``result``."""
    match resolved.category:
        case TypeCategory.CLASS:
            return [f"{result} = {revive_value(data, resolved)};"]
        case TypeCategory.DATE:
            return [f"{result} = {data} ? {revive_value(data, resolved)} : <any>null;"]
        case TypeCategory.ARRAY if resolved.needs_conversion and resolved.item is not None:
            return [
                f"if (Array.isArray({data})) {{",
                f"{_INDENT}{result} = [] as any;",
                f"{_INDENT}for (let item of {data})",
                f"{_INDENT * 2}{result}!.push({revive_value('item', resolved.item)});",
                "}",
                "else {",
                f"{_INDENT}{result} = <any>null;",
                "}",
            ]
        case TypeCategory.DICTIONARY if resolved.needs_conversion and resolved.item is not None:
            return [
                f"if ({data}) {{",
                f"{_INDENT}{result} = {{}} as any;",
                f"{_INDENT}for (let key in {data}) {{",
                f"{_INDENT * 2}if ({data}.hasOwnProperty(key))",
                f"{_INDENT * 3}(<any>{result})![key] = {data}[key] ? "
                f"{revive_value(f'{data}[key]', resolved.item)} : <any>null;",
                f"{_INDENT}}}",
                "}",
                "else {",
                f"{_INDENT}{result} = <any>null;",
                "}",
            ]
        case _:
            return [f"{result} = {data} !== undefined ? {data} : <any>null;"]


def query_value(expression: str, resolved: TypeReference) -> str:
    """String form of a path, query or header value before URL encoding."""
    if resolved.category is TypeCategory.DATE:
        return f'{expression} ? "" + {expression}.toISOString() : ""'
    return f'"" + {expression}'


def form_value(expression: str, resolved: TypeReference) -> str:
    """String form of a url-encoded or multipart form field."""
    match resolved.category:
        case TypeCategory.DATE:
            return f"{expression}.toISOString()"
        case TypeCategory.CLASS | TypeCategory.INTERFACE | TypeCategory.INLINE_OBJECT | TypeCategory.DICTIONARY:
            return f"JSON.stringify({expression})"
        case _:
            return f"{expression}.toString()"
