"""
OpenAPI Parser Module for TypeScript Client Generation

This module reads Swagger 2.0 and OpenAPI 3.x documents into the shared
schema and operation model.
"""

from .oas_parser import OASParser

__all__ = [
    "OASParser",
]
