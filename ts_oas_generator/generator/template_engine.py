"""
TypeScript Template Engine for OpenAPI Client Generation

This module uses Jinja2 templates to generate an Angular TypeScript client
from a resolved API document. Python builds small view objects (clients,
operations, DTO declarations); the templates lay out the final source text.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ts_oas_generator.config import GenerationPolicy, OperationGrouping
from ts_oas_generator.constants import CONTENT_TYPE_JSON, CONTENT_TYPE_OCTET_STREAM, GENERATOR_NAME
from ts_oas_generator.errors import GenerationError
from ts_oas_generator.generator import conversion
from ts_oas_generator.generator.emission import RxJsEmission, TypeScriptSyntax, select_rxjs_emission
from ts_oas_generator.generator.filters import FILTERS
from ts_oas_generator.generator.request_body import BodyConstructionPlan, BodyKind, RequestBodyStrategyResolver
from ts_oas_generator.generator.response_strategy import ResponseBranch, ResponsePlan, ResponseStrategyResolver
from ts_oas_generator.generator.type_resolver import TypeCategory, TypeReference, TypeResolver
from ts_oas_generator.model import Document, Operation, Parameter, ParameterLocation, Property, SchemaKind, SchemaNode
from ts_oas_generator.model.registry import RESERVED_TYPE_NAMES
from ts_oas_generator.utils.string_case import (
    capitalcase,
    quote_property_key,
    ts_enum_member_name,
    ts_method_name,
    ts_property_name,
    ts_type_name,
)

logger = logging.getLogger(__name__)

_INDENT = "    "

# Filename extraction from Content-Disposition, RFC 6266 `filename*` first
_FILE_RESPONSE_LINES = (
    'const contentDisposition = response.headers ? response.headers.get("content-disposition") : undefined;',
    r"let fileNameMatch = contentDisposition ? /filename\*=(?:(\\?['\"])(.*?)\1|(?:[^\s]+'.*?')?([^;\n]*))/g"
    r".exec(contentDisposition) : undefined;",
    "let fileName = fileNameMatch && fileNameMatch.length > 1 ? fileNameMatch[3] || fileNameMatch[2] : undefined;",
    "if (fileName) {",
    f"{_INDENT}fileName = decodeURIComponent(fileName);",
    "} else {",
    f"{_INDENT}fileNameMatch = contentDisposition ? "
    r'/filename="?([^"]*?)"?(;|$)/g.exec(contentDisposition) : undefined;',
    f"{_INDENT}fileName = fileNameMatch && fileNameMatch.length > 1 ? fileNameMatch[1] : undefined;",
    "}",
)


@dataclass
class GenerationResult:
    """Generated TypeScript source plus non-fatal warnings."""

    code: str
    warnings: list[str] = field(default_factory=list)


@dataclass
class ParameterView:
    """A method parameter as it appears in the generated signature."""

    parameter: Parameter
    variable: str
    type: TypeReference
    use_optional_marker: bool = False

    @property
    def name(self) -> str:
        return self.parameter.name

    @property
    def required(self) -> bool:
        return self.parameter.required

    @property
    def signature(self) -> str:
        if self.required:
            return f"{self.variable}: {self.type.rendered}"
        if self.use_optional_marker:
            return f"{self.variable}?: {self.type.rendered} | undefined"
        return f"{self.variable}: {self.type.rendered} | undefined"

    @property
    def doc(self) -> str:
        optional = "" if self.required else " (optional)"
        description = f" {self.parameter.description}" if self.parameter.description else ""
        return f"@param {self.variable}{optional}{description}"

    @property
    def undefined_error(self) -> str:
        return f"new Error({json.dumps(f'The parameter {self.variable!r} must be defined.')})"


@dataclass
class OperationView:
    """One generated client method and its ``process*`` companion."""

    operation: Operation
    method_name: str
    parameters: list[ParameterView]
    response_plan: ResponsePlan
    body_plan: BodyConstructionPlan
    url_lines: list[str]
    body_lines: list[str]
    headers: list[tuple[str, str]]
    branches: list[tuple[ResponseBranch, list[str]]] = field(default_factory=list)
    default_lines: list[str] = field(default_factory=list)
    unexpected_lines: list[str] = field(default_factory=list)

    @property
    def http_method(self) -> str:
        return self.operation.method

    @property
    def process_name(self) -> str:
        return f"process{capitalcase(self.method_name)}"

    @property
    def return_type(self) -> str:
        return self.response_plan.return_type

    @property
    def signature(self) -> str:
        arguments = ", ".join(param.signature for param in self.parameters)
        return f"{self.method_name}({arguments}): Observable<{self.return_type}>"

    @property
    def required_parameters(self) -> list[ParameterView]:
        return [param for param in self.parameters if param.required]

    @property
    def has_body(self) -> bool:
        return bool(self.body_lines)

    @property
    def doc_lines(self) -> list[str | None]:
        lines: list[str | None] = [self.operation.summary, self.operation.description]
        lines.extend(param.doc for param in self.parameters)
        success = next((branch for branch in self.response_plan.success_branches if branch.description), None)
        if success is not None:
            lines.append(f"@return {success.description}")
        if self.operation.deprecated:
            lines.append("@deprecated")
        return lines


@dataclass
class ClientView:
    name: str
    operations: list[OperationView] = field(default_factory=list)

    @property
    def interface_name(self) -> str:
        return f"I{self.name}"


@dataclass
class PropertyView:
    """One DTO member."""

    prop: Property
    member: str
    type: TypeReference
    initializer: str | None = None

    @property
    def required(self) -> bool:
        return self.prop.required

    @property
    def description(self) -> str | None:
        return self.prop.description

    def class_declaration(self, syntax: TypeScriptSyntax) -> str:
        if self.required:
            return f"{self.member}{syntax.definite()}: {self.type.rendered};"
        return f"{self.member}?: {self.type.rendered} | undefined;"

    @property
    def interface_declaration(self) -> str:
        if self.required:
            return f"{self.member}: {self.type.rendered};"
        return f"{self.member}?: {self.type.rendered} | undefined;"

    @property
    def init_lines(self) -> list[str]:
        return conversion.init_lines(self.prop.name, self.member, self.type, self.initializer)

    @property
    def to_json_lines(self) -> list[str]:
        return conversion.to_json_lines(self.prop.name, self.member, self.type)


@dataclass
class DtoView:
    """A DTO class (DTO generation on) or flattened interface (off)."""

    name: str
    properties: list[PropertyView]
    description: str | None = None
    base: str | None = None
    is_abstract: bool = False
    discriminator: str | None = None
    discriminator_value: str | None = None
    is_discriminator_root: bool = False
    derived: list[tuple[str, str]] = field(default_factory=list)

    @property
    def interface_name(self) -> str:
        return f"I{self.name}"

    @property
    def base_interface(self) -> str | None:
        return f"I{self.base}" if self.base else None

    @property
    def initializers(self) -> list[PropertyView]:
        return [prop for prop in self.properties if prop.initializer]


@dataclass
class EnumView:
    name: str
    members: list[tuple[str, str]]
    is_string: bool
    is_declaration: bool
    description: str | None = None

    @property
    def literal_union(self) -> str:
        return " | ".join(literal for _, literal in self.members) or "any"


class OperationAnalyzer:
    """Groups operations into clients and names their methods."""

    @staticmethod
    def split_operation_id(operation: Operation, grouping: OperationGrouping) -> tuple[str, str]:
        """Return ``(controller, method)`` for an operation."""
        operation_id = operation.operation_id
        match grouping:
            case OperationGrouping.OPERATION_ID if "_" in operation_id:
                controller, method = operation_id.split("_", 1)
                return controller, method
            case OperationGrouping.FIRST_TAG if operation.tags:
                return operation.tags[0], operation_id
            case _:
                return "", operation_id

    @staticmethod
    def order_parameters(operation: Operation) -> list[Parameter]:
        """Path, then query and header, then body and form; declaration order within each."""
        return [
            *operation.parameters_in(ParameterLocation.PATH),
            *operation.parameters_in(ParameterLocation.QUERY, ParameterLocation.HEADER),
            *operation.parameters_in(ParameterLocation.BODY, ParameterLocation.FORM),
        ]


class TypeScriptTemplateEngine:
    """Template engine for generating TypeScript code."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize the template engine."""
        if template_dir is None:
            current_dir = Path(__file__).parent
            template_dir = current_dir.parent / "templates"

        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._register_filters()

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters for TypeScript code generation."""
        builtin_filters = {
            "type_name": ts_type_name,
            "method_name": ts_method_name,
            "property_name": ts_property_name,
        }

        self.env.filters.update(builtin_filters)
        self.env.filters.update(FILTERS)

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template with the given context."""
        template = self.env.get_template(template_name)
        return template.render(**context)


class AngularClientGenerator:
    """Main code generator for Angular clients."""

    def __init__(
        self,
        policy: GenerationPolicy | None = None,
        template_engine: TypeScriptTemplateEngine | None = None,
    ) -> None:
        """Initialize the code generator."""
        self.policy = policy or GenerationPolicy()
        self.template_engine = template_engine or TypeScriptTemplateEngine()
        self.rx: RxJsEmission = select_rxjs_emission(self.policy.rxjs_version)
        self.syntax = TypeScriptSyntax(self.policy.typescript_version)

    def generate(self, document: Document) -> GenerationResult:
        """Generate the complete TypeScript source for ``document``."""
        resolver = TypeResolver(document.registry, self.policy)
        warnings: list[str] = []

        clients = self._build_clients(document, resolver, warnings)
        enums = self._build_enums(document, resolver)
        dtos = self._build_dtos(document, resolver)

        operations = [view for client in clients for view in client.operations]
        context = {
            "generator_name": GENERATOR_NAME,
            "title": document.title,
            "version": document.version,
            "policy": self.policy,
            "export": self.policy.export_types,
            "rx": self.rx,
            "ts": self.syntax,
            "uses_file_parameter": any(
                param.type.is_file or (param.type.item is not None and param.type.item.is_file)
                for view in operations
                for param in view.parameters
            ),
            "uses_file_response": any(view.response_plan.returns_file for view in operations),
        }

        sections = [self._render("header.ts.j2", context)]
        sections.extend(self._render("client.ts.j2", {**context, "client": client}) for client in clients)
        sections.extend(self._render("enum.ts.j2", {**context, "enum": enum}) for enum in enums)
        dto_template = "dto_class.ts.j2" if self.policy.generate_dto_types else "dto_interface.ts.j2"
        sections.extend(self._render(dto_template, {**context, "dto": dto}) for dto in dtos)
        sections.append(self._render("helpers.ts.j2", context))

        code = "\n\n".join(section for section in sections if section) + "\n"
        logger.debug(
            "Generated %d client(s), %d enum(s) and %d DTO type(s)", len(clients), len(enums), len(dtos)
        )
        return GenerationResult(code=code, warnings=warnings)

    def _render(self, template_name: str, context: dict[str, Any]) -> str:
        template_path = f"{self.policy.template.value}/{template_name}"
        return self.template_engine.render_template(template_path, context).strip("\n")

    # Clients

    def _build_clients(self, document: Document, resolver: TypeResolver, warnings: list[str]) -> list[ClientView]:
        responses = ResponseStrategyResolver(resolver, self.policy)
        bodies = RequestBodyStrategyResolver()
        clients: dict[str, ClientView] = {}
        method_names: dict[str, set[str]] = {}
        client_names: dict[str, str] = {}
        taken = {node.name for node in document.registry.schemas() if node.name}
        taken |= {f"I{name}" for name in taken} | RESERVED_TYPE_NAMES

        for operation in document.operations:
            controller, method = OperationAnalyzer.split_operation_id(operation, self.policy.operation_grouping)
            requested = self.policy.client_class_name.format(controller=ts_type_name(controller) if controller else "")
            if requested not in client_names:
                client_names[requested] = self._unique_client_name(requested, taken, warnings)
            client_name = client_names[requested]
            client = clients.setdefault(client_name, ClientView(client_name))

            used = method_names.setdefault(client_name, set())
            method_name = ts_method_name(method) or "request"
            unique = method_name
            suffix = 2
            while unique in used:
                unique = f"{method_name}{suffix}"
                suffix += 1
            used.add(unique)

            body_plan = bodies.plan(operation)
            warnings.extend(body_plan.warnings)
            client.operations.append(
                self._build_operation(operation, unique, resolver, responses.plan(operation.responses), body_plan)
            )

        return list(clients.values())

    @staticmethod
    def _unique_client_name(requested: str, taken: set[str], warnings: list[str]) -> str:
        """Suffix a client class name that clashes with a generated type or its interface."""
        unique = requested
        suffix = 2
        while unique in taken or f"I{unique}" in taken:
            unique = f"{requested}{suffix}"
            suffix += 1
        if unique != requested:
            message = f"Client class {requested} clashes with a generated type name; using {unique}"
            logger.warning(message)
            warnings.append(message)
        taken.update({unique, f"I{unique}"})
        return unique

    def _build_operation(
        self,
        operation: Operation,
        method_name: str,
        resolver: TypeResolver,
        response_plan: ResponsePlan,
        body_plan: BodyConstructionPlan,
    ) -> OperationView:
        ordered = OperationAnalyzer.order_parameters(operation)
        if body_plan.kind in (BodyKind.URL_ENCODED, BodyKind.MULTIPART):
            ordered = [param for param in ordered if not param.is_body]
        elif body_plan.kind is not BodyKind.NONE:
            ordered = [param for param in ordered if not param.is_form]

        views: list[ParameterView] = []
        variables: set[str] = set()
        for param in ordered:
            variable = param.variable_name
            suffix = 2
            while variable in variables:
                variable = f"{param.variable_name}{suffix}"
                suffix += 1
            variables.add(variable)
            views.append(ParameterView(param, variable, resolver.resolve_parameter(param.schema)))

        # `name?: T` is only legal when every following parameter is optional too
        trailing_optional = True
        for view in reversed(views):
            trailing_optional = trailing_optional and not view.required
            view.use_optional_marker = trailing_optional

        default = response_plan.default_branch
        unexpected = [
            *self._read_text(),
            f"return throwException({json.dumps(response_plan.unexpected_message)}, status, _responseText, _headers);",
            f"{self.rx.close};",
        ]
        return OperationView(
            operation=operation,
            method_name=method_name,
            parameters=views,
            response_plan=response_plan,
            body_plan=body_plan,
            url_lines=self._url_lines(operation, views),
            body_lines=self._body_lines(body_plan, views),
            headers=self._headers(body_plan, response_plan, views),
            branches=[(branch, self._branch_lines(branch)) for branch in response_plan.conditional_branches],
            default_lines=self._branch_lines(default) if default is not None else [],
            unexpected_lines=unexpected if response_plan.unexpected_condition else [],
        )

    def _read_text(self) -> list[str]:
        return [f"return blobToText(responseBlob){self.rx.merge_map('_responseText: string')}"]

    def _branch_lines(self, branch: ResponseBranch) -> list[str]:
        """Body of one status arm of a ``process*`` method, at a single indentation level."""
        if branch.is_success and branch.is_file:
            return [
                *_FILE_RESPONSE_LINES,
                "return "
                + self.rx.of("{ fileName: fileName, data: responseBlob as any, status: status, headers: _headers }")
                + ";",
            ]

        lines = self._read_text()
        typed = branch.schema_type is not None and not branch.is_file
        if typed:
            result, data = branch.result_variable, branch.data_variable
            lines.append(f"let {result}: any = null;")
            lines.append(
                f'let {data} = _responseText === "" ? null : JSON.parse(_responseText, this.jsonParseReviver);'
            )
            lines.extend(conversion.response_lines(result, data, branch.schema_type))

        if branch.is_success:
            lines.append(f"return {self.rx.of(branch.result_variable if typed else 'null as any')};")
        else:
            arguments = f"{json.dumps(branch.error_message)}, status, _responseText, _headers"
            if typed:
                arguments += f", {branch.result_variable}"
            lines.append(f"return throwException({arguments});")
        lines.append(f"{self.rx.close};")
        return lines

    def _url_lines(self, operation: Operation, views: list[ParameterView]) -> list[str]:
        path_views = [view for view in views if view.parameter.location is ParameterLocation.PATH]
        query_views = [view for view in views if view.parameter.location is ParameterLocation.QUERY]

        route = operation.path if operation.path.startswith("/") else f"/{operation.path}"
        lines = [f"let url_ = this.baseUrl + {json.dumps(route + ('?' if query_views else ''))};"]

        for view in path_views:
            placeholder = json.dumps("{" + view.name + "}")
            value = conversion.query_value(view.variable, view.type)
            lines.append(f"url_ = url_.replace({placeholder}, encodeURIComponent({value}));")

        for view in query_views:
            lines.extend(self._query_lines(view))

        lines.append('url_ = url_.replace(/[?&]$/, "");')
        return lines

    @staticmethod
    def _query_lines(view: ParameterView) -> list[str]:
        key = json.dumps(view.name + "=")
        if view.type.category is TypeCategory.ARRAY and view.type.item is not None:
            value = conversion.query_value("item", view.type.item)
            statement = f"{view.variable}.forEach(item => {{ url_ += {key} + encodeURIComponent({value}) + \"&\"; }});"
        else:
            value = conversion.query_value(view.variable, view.type)
            statement = f'url_ += {key} + encodeURIComponent({value}) + "&";'

        if view.required:
            return [statement]
        return [f"if ({view.variable} !== undefined && {view.variable} !== null)", f"{_INDENT}{statement}"]

    @staticmethod
    def _body_lines(plan: BodyConstructionPlan, views: list[ParameterView]) -> list[str]:
        by_parameter = {id(view.parameter): view for view in views}

        match plan.kind:
            case BodyKind.JSON if plan.body_parameter is not None:
                return [f"const content_ = JSON.stringify({by_parameter[id(plan.body_parameter)].variable});"]
            case BodyKind.BINARY if plan.body_parameter is not None:
                view = by_parameter[id(plan.body_parameter)]
                source = f"{view.variable}.data" if view.type.is_file else view.variable
                return [f"const content_ = {source};"]
            case BodyKind.URL_ENCODED:
                lines = ["const contentPairs_: string[] = [];"]
                for param in plan.form_parameters:
                    view = by_parameter[id(param)]
                    key = f"encodeURIComponent({json.dumps(param.name)})"
                    if view.type.category is TypeCategory.ARRAY and view.type.item is not None:
                        value = conversion.form_value("item_", view.type.item)
                        push = (
                            f"{view.variable}.forEach(item_ => contentPairs_.push("
                            f'{key} + "=" + encodeURIComponent({value})));'
                        )
                    else:
                        value = conversion.form_value(view.variable, view.type)
                        push = f'contentPairs_.push({key} + "=" + encodeURIComponent({value}));'
                    lines.extend(_guarded(view, push))
                lines.append('const content_ = contentPairs_.join("&");')
                return lines
            case BodyKind.MULTIPART:
                lines = ["const content_ = new FormData();"]
                for param in plan.form_parameters:
                    view = by_parameter[id(param)]
                    lines.extend(_guarded(view, _form_append(view)))
                return lines
            case _:
                return []

    @staticmethod
    def _headers(
        body_plan: BodyConstructionPlan, response_plan: ResponsePlan, views: list[ParameterView]
    ) -> list[tuple[str, str]]:
        headers: list[tuple[str, str]] = []
        for view in views:
            if view.parameter.location is not ParameterLocation.HEADER:
                continue
            value = conversion.query_value(view.variable, view.type)
            if not view.required:
                value = f'{view.variable} !== undefined && {view.variable} !== null ? {value} : ""'
            headers.append((view.name, value))

        if body_plan.content_type is not None and body_plan.kind is not BodyKind.MULTIPART:
            headers.append(("Content-Type", json.dumps(body_plan.content_type)))

        if response_plan.returns_file:
            headers.append(("Accept", json.dumps(CONTENT_TYPE_OCTET_STREAM)))
        elif response_plan.return_type != "void":
            headers.append(("Accept", json.dumps(CONTENT_TYPE_JSON)))
        return headers

    # Types

    def _build_enums(self, document: Document, resolver: TypeResolver) -> list[EnumView]:
        enums = []
        for node in document.registry.schemas():
            if node.kind is not SchemaKind.ENUM or not resolver.is_declared_type(node):
                continue
            is_string = node.primitive == "string"
            is_declaration = node.primitive == "number" or (is_string and self.syntax.string_enums)
            enums.append(
                EnumView(
                    name=str(node.name),
                    members=_enum_members(node),
                    is_string=is_string,
                    is_declaration=is_declaration,
                    description=node.description,
                )
            )
        return enums

    def _build_dtos(self, document: Document, resolver: TypeResolver) -> list[DtoView]:
        nodes = [
            node
            for node in document.registry.schemas()
            if node.kind is SchemaKind.OBJECT and resolver.is_declared_type(node)
        ]
        if not self.policy.generate_dto_types:
            return [self._flattened_interface(node, resolver) for node in nodes]
        return [self._dto_class(node, resolver) for node in self._bases_first(nodes, resolver)]

    @staticmethod
    def _class_base(node: SchemaNode, resolver: TypeResolver) -> SchemaNode | None:
        base = resolver.base_of(node)
        if base is None or base.is_generic_declaration or base.kind is not SchemaKind.OBJECT:
            return None
        return base if resolver.is_declared_type(base) else None

    def _bases_first(self, nodes: list[SchemaNode], resolver: TypeResolver) -> list[SchemaNode]:
        ordered: list[SchemaNode] = []
        placed: set[str | None] = set()
        visiting: set[str | None] = set()

        def place(node: SchemaNode) -> None:
            if node.key in placed:
                return
            if node.key in visiting:
                msg = f"Inheritance cycle detected at {node.key}"
                raise GenerationError(msg)
            visiting.add(node.key)
            base = self._class_base(node, resolver)
            if base is not None:
                place(base)
            placed.add(node.key)
            ordered.append(node)

        for node in nodes:
            place(node)
        return ordered

    def _dto_class(self, node: SchemaNode, resolver: TypeResolver) -> DtoView:
        base = self._class_base(node, resolver)
        properties = []
        for prop in resolver.own_properties(node) if base else self._own_root_properties(node, resolver):
            resolved = resolver.resolve(prop.schema)
            initializer = resolver.concrete_initializer(resolved) if prop.required else None
            properties.append(PropertyView(prop, ts_property_name(prop.name), resolved, initializer))

        owner = resolver.discriminator_owner(node)
        derived = []
        if owner is node:
            derived = [
                (resolver.discriminator_value(child), str(child.name))
                for child in resolver.derived_types(node)
                if not child.is_abstract
            ]

        return DtoView(
            name=str(node.name),
            properties=properties,
            description=node.description,
            base=str(base.name) if base else None,
            is_abstract=node.is_abstract,
            discriminator=owner.discriminator if owner else None,
            discriminator_value=resolver.discriminator_value(node) if owner else None,
            is_discriminator_root=owner is node,
            derived=derived,
        )

    @staticmethod
    def _own_root_properties(node: SchemaNode, resolver: TypeResolver) -> list[Property]:
        """Properties of a class without an emitted base; an unemitted base is flattened in."""
        if resolver.base_of(node) is None:
            return resolver.own_properties(node)
        discriminator = resolver.discriminator_property(node)
        return [prop for prop in resolver.flattened_properties(node) if prop.name != discriminator]

    @staticmethod
    def _flattened_interface(node: SchemaNode, resolver: TypeResolver) -> DtoView:
        properties = [
            PropertyView(prop, quote_property_key(prop.name), resolver.resolve(prop.schema))
            for prop in resolver.flattened_properties(node)
        ]
        return DtoView(name=str(node.name), properties=properties, description=node.description)


def _guarded(view: ParameterView, statement: str) -> list[str]:
    if view.required:
        return [statement]
    return [f"if ({view.variable} !== null && {view.variable} !== undefined)", f"{_INDENT}{statement}"]


def _form_append(view: ParameterView) -> str:
    key = json.dumps(view.name)
    resolved = view.type
    if resolved.category is TypeCategory.ARRAY and resolved.item is not None:
        item = resolved.item
        if item.is_file:
            return (
                f"{view.variable}.forEach(item_ => content_.append({key}, item_.data, "
                f"item_.fileName ? item_.fileName : {key}));"
            )
        return f"{view.variable}.forEach(item_ => content_.append({key}, {conversion.form_value('item_', item)}));"
    if resolved.is_file:
        return (
            f"content_.append({key}, {view.variable}.data, "
            f"{view.variable}.fileName ? {view.variable}.fileName : {key});"
        )
    return f"content_.append({key}, {conversion.form_value(view.variable, resolved)});"


def _enum_members(node: SchemaNode) -> list[tuple[str, str]]:
    members: list[tuple[str, str]] = []
    used: set[str] = set()
    for index, value in enumerate(node.enum_values):
        name = node.enum_names[index] if index < len(node.enum_names) else None
        member = ts_type_name(name) if name else ts_enum_member_name(value)
        unique = member
        suffix = 2
        while unique in used:
            unique = f"{member}{suffix}"
            suffix += 1
        used.add(unique)
        members.append((unique, json.dumps(value)))
    return members


def emit(document: Document, policy: GenerationPolicy | None = None) -> str:
    """Generate the TypeScript source for ``document`` under ``policy``."""
    return AngularClientGenerator(policy).generate(document).code
