"""
TypeScript Code Generator Module

This module provides Jinja2-based code generation for Angular TypeScript
clients from OpenAPI specifications.
"""

from .request_body import BodyConstructionPlan, BodyKind, RequestBodyStrategyResolver
from .response_strategy import ResponseBranch, ResponsePlan, ResponseStrategyResolver
from .template_engine import AngularClientGenerator, GenerationResult, TypeScriptTemplateEngine, emit
from .type_resolver import TypeCategory, TypeContext, TypeReference, TypeResolver

__all__ = [
    "AngularClientGenerator",
    "BodyConstructionPlan",
    "BodyKind",
    "GenerationResult",
    "RequestBodyStrategyResolver",
    "ResponseBranch",
    "ResponsePlan",
    "ResponseStrategyResolver",
    "TypeCategory",
    "TypeContext",
    "TypeReference",
    "TypeResolver",
    "TypeScriptTemplateEngine",
    "emit",
]
