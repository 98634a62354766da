"""Tests for mapping schema nodes onto TypeScript types."""

from typing import Any

import pytest

from ts_oas_generator.config import DateType, GenerationPolicy
from ts_oas_generator.generator.type_resolver import TypeCategory, TypeContext, TypeResolver
from ts_oas_generator.model import DocumentBuilder, Property, SchemaNode
from ts_oas_generator.parser import OASParser

PET = "#/components/schemas/Pet"


@pytest.fixture
def resolver(petstore_spec: dict[str, Any]) -> TypeResolver:
    document = OASParser().parse_dict(petstore_spec)
    return TypeResolver(document.registry, GenerationPolicy())


class TestPrimitives:
    @pytest.mark.parametrize(
        ("node", "expected"),
        [
            (SchemaNode.primitive_type("string"), "string"),
            (SchemaNode.primitive_type("integer", "int64"), "number"),
            (SchemaNode.primitive_type("boolean"), "boolean"),
            (SchemaNode.any_type(), "any"),
            (SchemaNode.primitive_type("string", nullable=True), "string | null"),
        ],
    )
    def test_primitive_types(self, resolver: TypeResolver, node: SchemaNode, expected: str) -> None:
        assert resolver.resolve(node).rendered == expected

    def test_dates_follow_policy(self, petstore_spec: dict[str, Any]) -> None:
        registry = OASParser().parse_dict(petstore_spec).registry
        node = SchemaNode.primitive_type("string", "date-time")

        assert TypeResolver(registry, GenerationPolicy()).resolve(node).category is TypeCategory.DATE
        as_string = TypeResolver(registry, GenerationPolicy(date_type=DateType.STRING)).resolve(node)
        assert as_string.rendered == "string"
        without_dtos = TypeResolver(registry, GenerationPolicy(generate_dto_types=False)).resolve(node)
        assert without_dtos.rendered == "string"

    def test_files_depend_on_context(self, resolver: TypeResolver) -> None:
        node = SchemaNode.primitive_type("string", "binary")
        assert resolver.resolve(node).name == "Blob"
        assert resolver.resolve(node, TypeContext.PARAMETER).name == "FileParameter"
        assert resolver.resolve_response(node).name == "FileResponse"


class TestComposites:
    def test_array_of_classes(self, resolver: TypeResolver) -> None:
        resolved = resolver.resolve(SchemaNode.array_type(SchemaNode.reference(PET)))
        assert resolved.rendered == "Pet[]"
        assert resolved.needs_conversion

    def test_array_of_nullable_items_is_parenthesised(self, resolver: TypeResolver) -> None:
        resolved = resolver.resolve(SchemaNode.array_type(SchemaNode.primitive_type("string", nullable=True)))
        assert resolved.rendered == "(string | null)[]"

    def test_dictionary(self, resolver: TypeResolver) -> None:
        resolved = resolver.resolve(SchemaNode.dictionary_type(SchemaNode.primitive_type("integer")))
        assert resolved.rendered == "{ [key: string]: number; }"
        assert resolved.category is TypeCategory.DICTIONARY

    def test_inline_enum_becomes_literal_union(self, resolver: TypeResolver) -> None:
        resolved = resolver.resolve(SchemaNode.enum_type(["a", "b"]))
        assert resolved.rendered == '"a" | "b"'

    def test_named_enum(self, resolver: TypeResolver) -> None:
        resolved = resolver.resolve(SchemaNode.reference("#/components/schemas/Size"))
        assert resolved.rendered == "Size"
        assert resolved.category is TypeCategory.ENUM

    def test_union(self, resolver: TypeResolver) -> None:
        node = SchemaNode.union_type([SchemaNode.primitive_type("string"), SchemaNode.primitive_type("integer")])
        assert resolver.resolve(node).rendered == "string | number"

    def test_inline_object(self, resolver: TypeResolver) -> None:
        node = SchemaNode.object_type(
            [Property("id", SchemaNode.primitive_type("integer"), required=True),
             Property("first-name", SchemaNode.primitive_type("string"))]
        )
        resolved = resolver.resolve(node)
        assert resolved.rendered == '{ id: number; "first-name"?: string | undefined; }'
        assert resolved.category is TypeCategory.INLINE_OBJECT

    def test_interfaces_without_dtos(self, petstore_spec: dict[str, Any]) -> None:
        registry = OASParser().parse_dict(petstore_spec).registry
        resolved = TypeResolver(registry, GenerationPolicy(generate_dto_types=False)).resolve(SchemaNode.reference(PET))
        assert resolved.category is TypeCategory.INTERFACE
        assert not resolved.needs_conversion


class TestAliases:
    def test_named_array_is_inlined(self) -> None:
        builder = DocumentBuilder()
        builder.add_schema("#/definitions/Names", SchemaNode.array_type(SchemaNode.primitive_type("string")))
        registry = builder.build().registry

        resolved = TypeResolver(registry, GenerationPolicy()).resolve(SchemaNode.reference("#/definitions/Names"))
        assert resolved.rendered == "string[]"

    def test_self_referencing_alias(self) -> None:
        builder = DocumentBuilder()
        builder.add_schema("#/definitions/Tree", SchemaNode.array_type(SchemaNode.reference("#/definitions/Tree")))
        registry = builder.build().registry

        resolved = TypeResolver(registry, GenerationPolicy()).resolve(SchemaNode.reference("#/definitions/Tree"))
        assert resolved.rendered == "any[]"


class TestHierarchy:
    def test_derived_types_in_registration_order(self, resolver: TypeResolver) -> None:
        pet = resolver.registry.get(PET)
        assert [str(node.name) for node in resolver.derived_types(pet)] == ["Cat", "Dog"]

    def test_discriminator_is_not_a_member(self, resolver: TypeResolver) -> None:
        pet = resolver.registry.get(PET)
        assert "petType" not in [prop.name for prop in resolver.own_properties(pet)]
        assert resolver.discriminator_property(resolver.registry.get("#/components/schemas/Cat")) == "petType"

    def test_discriminator_value_defaults_to_schema_name(self, resolver: TypeResolver) -> None:
        assert resolver.discriminator_value(resolver.registry.get("#/components/schemas/Dog")) == "Dog"

    def test_flattened_properties(self, resolver: TypeResolver) -> None:
        dog = resolver.registry.get("#/components/schemas/Dog")
        assert [prop.name for prop in resolver.flattened_properties(dog)] == [
            "name", "petType", "born", "owner", "toys"
        ]


class TestInitializers:
    def test_concrete_initializers(self, resolver: TypeResolver) -> None:
        toy = resolver.resolve(SchemaNode.reference("#/components/schemas/Toy"))
        assert resolver.concrete_initializer(toy) == "new Toy()"
        assert resolver.concrete_initializer(resolver.resolve(SchemaNode.array_type(SchemaNode.any_type()))) == "[]"
        dictionary = resolver.resolve(SchemaNode.dictionary_type(SchemaNode.any_type()))
        assert resolver.concrete_initializer(dictionary) == "{}"

    def test_abstract_and_nullable_have_no_initializer(self, resolver: TypeResolver) -> None:
        assert resolver.concrete_initializer(resolver.resolve(SchemaNode.reference(PET))) is None
        nullable = resolver.resolve(SchemaNode.reference("#/components/schemas/Toy", nullable=True))
        assert resolver.concrete_initializer(nullable) is None
