"""Tests for generated DTO classes, interfaces and enums."""

from typing import Any

from ts_oas_generator.config import GenerationPolicy
from ts_oas_generator.generator import emit
from ts_oas_generator.parser import OASParser


def generate(spec: dict[str, Any], **options: Any) -> str:  # noqa: ANN401
    return emit(OASParser().parse_dict(spec), GenerationPolicy(**options))


class TestDtoClasses:
    def test_class_shape(self, complex_spec: dict[str, Any]) -> None:
        code = generate(complex_spec)
        assert "export class Foo implements IFoo {" in code
        assert "    bar?: string | undefined;" in code
        assert "    constructor(data?: IFoo) {" in code
        assert '            this.bar = _data["Bar"];' in code
        assert "    static fromJS(data: any): Foo {" in code
        assert '        data["Bar"] = this.bar;' in code
        assert "export interface IFoo {" in code

    def test_bases_are_emitted_first(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert code.index("export abstract class Pet ") < code.index("export class Cat extends Pet")
        assert code.index("export abstract class Pet") < code.index("export class Dog extends Pet")

    def test_discriminator_dispatch(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert 'if (data["petType"] === "Cat") {' in code
        assert "            let result = new Dog();" in code
        assert "throw new Error(\"The abstract class 'Pet' cannot be instantiated.\");" in code
        assert "    protected _discriminator: string;" in code
        assert '        this._discriminator = "Dog";' in code
        assert '        data["petType"] = this._discriminator;' in code

    def test_derived_classes_call_base(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec, typescript_version=4.3)
        assert "        super(data);" in code
        assert "    override init(_data?: any) {" in code
        assert "    static override fromJS(data: any): Dog {" in code
        assert "        super.toJSON(data);" in code
        assert "export interface IDog extends IPet {" in code

    def test_required_array_initializer(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert "    toys!: Toy[];" in code
        assert "            this.toys = [];" in code
        assert "        this.toys!.push(Toy.fromJS(item));" in code

    def test_dates_are_revived(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert 'this.born = _data["born"] ? new Date(_data["born"].toString()) : <any>undefined;' in code
        assert 'data["born"] = this.born ? this.born.toISOString() : <any>undefined;' in code

    def test_definite_assignment_needs_2_7(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec, typescript_version=2.6)
        assert "    toys: Toy[];" in code
        assert "toys!:" not in code


class TestDtoInterfaces:
    def test_flattened_interfaces(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec, generate_dto_types=False)
        assert "export interface Dog {" in code
        assert "    petType: string;" in code
        assert "    born?: string | undefined;" in code
        assert "    toys: Toy[];" in code
        assert "export class Dog" not in code
        assert "fromJS" not in code

    def test_responses_are_not_revived(self, complex_spec: dict[str, Any]) -> None:
        code = generate(complex_spec, generate_dto_types=False)
        assert "result200 = resultData200 !== undefined ? resultData200 : <any>null;" in code


class TestEnums:
    def test_string_enum(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert "export enum Size {\n    Small = \"small\",\n    MediumLarge = \"medium-large\",\n}" in code

    def test_enum_names(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert "export enum Priority {\n    Low = 1,\n    High = 2,\n}" in code

    def test_string_enum_before_2_4(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec, typescript_version=2.3)
        assert 'export type Size = "small" | "medium-large";' in code
        assert "export enum Priority {" in code
