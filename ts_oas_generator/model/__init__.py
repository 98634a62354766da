"""
Schema and operation model shared by the parser and the generator.
"""

from .document import Document, DocumentBuilder
from .operation import Operation, Parameter, ParameterLocation, Response
from .registry import SchemaRegistry
from .schema import Property, SchemaKind, SchemaNode

__all__ = [
    "Document",
    "DocumentBuilder",
    "Operation",
    "Parameter",
    "ParameterLocation",
    "Property",
    "Response",
    "SchemaKind",
    "SchemaNode",
    "SchemaRegistry",
]
