"""
Jinja2 filters for TypeScript code generation.

This module provides custom Jinja2 filters used by the Angular templates.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

_DOC_PREFIX = " * "


def ts_doc_comment(lines: Iterable[str | None], indent: int = 0) -> str:
    """Format text lines as a TSDoc block comment.

    Empty entries are dropped; an empty result renders nothing.

    Args:
        lines: Text lines, possibly multi-line strings.
        indent: Number of spaces for base indentation.

    Returns:
        Formatted comment block without a trailing newline.

    Example:
        >>> print(ts_doc_comment(["Adds a message", "@param message The message"], 4))
            /**
             * Adds a message
             * @param message The message
             */
    """
    body: list[str] = []
    for entry in lines:
        if not entry:
            continue
        body.extend(line.rstrip().replace("*/", "*\\/") for line in entry.strip().split("\n"))

    if not body:
        return ""

    indent_str = " " * indent
    result = [f"{indent_str}/**"]
    result.extend(f"{indent_str}{_DOC_PREFIX}{line}".rstrip() for line in body)
    result.append(f"{indent_str} */")
    return "\n".join(result)


def indent_lines(lines: Iterable[str], indent: int) -> str:
    """Join lines, prefixing every non-empty one with ``indent`` spaces.

    Example:
        >>> indent_lines(["if (a) {", "    b();", "}"], 4)
        '    if (a) {\\n        b();\\n    }'
    """
    prefix = " " * indent
    return "\n".join(f"{prefix}{line}" if line else "" for line in lines)


def ts_string_literal(text: str) -> str:
    """Format text as a double-quoted TypeScript string literal.

    Example:
        >>> ts_string_literal('say "hi"')
        '"say \\\\"hi\\\\""'
    """
    return json.dumps(text)


def ts_export(enabled: bool) -> str:  # noqa: FBT001
    """Prefix for top-level declarations depending on the export policy."""
    return "export " if enabled else ""


# Register filters that will be available in Jinja templates
FILTERS = {
    "ts_doc_comment": ts_doc_comment,
    "indent_lines": indent_lines,
    "ts_string_literal": ts_string_literal,
    "ts_export": ts_export,
}
