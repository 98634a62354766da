"""
TypeScript OpenAPI Client Generator

A Jinja2-based generator that produces Angular TypeScript clients from
Swagger 2.0 and OpenAPI 3 specifications.
"""

from .config import GenerationPolicy
from .errors import ConfigurationError, DocumentLoadError, GenerationError, UnresolvedSchemaError
from .generator import AngularClientGenerator, GenerationResult, TypeScriptTemplateEngine, emit
from .model import Document, DocumentBuilder
from .parser import OASParser

__version__ = "1.0.0"
__author__ = "OpenAPI TypeScript Generator"

__all__ = [
    "AngularClientGenerator",
    "ConfigurationError",
    "Document",
    "DocumentBuilder",
    "DocumentLoadError",
    "GenerationError",
    "GenerationPolicy",
    "GenerationResult",
    "OASParser",
    "TypeScriptTemplateEngine",
    "UnresolvedSchemaError",
    "emit",
]
