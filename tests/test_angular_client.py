"""End-to-end tests for the generated Angular client code."""

from typing import Any

import pytest

from ts_oas_generator.config import GenerationPolicy, OperationGrouping
from ts_oas_generator.generator import AngularClientGenerator, emit
from ts_oas_generator.parser import OASParser


def generate(spec: dict[str, Any], **options: Any) -> str:  # noqa: ANN401
    return emit(OASParser().parse_dict(spec), GenerationPolicy(**options))


class TestDiscussionClient:
    def test_void_return_value(self, discussion_spec: dict[str, Any]) -> None:
        code = generate(discussion_spec, generate_client_interfaces=True, typescript_version=2.0)
        assert "addMessage(message: Foo): Observable<void>" in code

    def test_export_types(self, discussion_spec: dict[str, Any]) -> None:
        code = generate(discussion_spec, generate_client_interfaces=True, typescript_version=2.0, export_types=True)
        assert "export class DiscussionClient" in code
        assert "export interface IDiscussionClient" in code

    def test_no_export_types(self, discussion_spec: dict[str, Any]) -> None:
        code = generate(discussion_spec, generate_client_interfaces=True, typescript_version=2.0, export_types=False)
        assert "export class DiscussionClient" not in code
        assert "export interface IDiscussionClient" not in code
        assert "class DiscussionClient implements IDiscussionClient" in code
        assert "export " not in code

    def test_generic_request(self, discussion_spec: dict[str, Any]) -> None:
        code = generate(discussion_spec, generate_dto_types=True, typescript_version=2.7, export_types=False)
        assert "this.request = new RequestBodyBase()" in code
        assert "this.request = new RequestBody()" in code
        assert "class GenericRequest1 extends GenericRequestBaseOfRequestBodyBase" in code
        assert "class GenericRequestBase " not in code

    def test_required_parameters_reject(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert "if (petId === undefined || petId === null)" in code
        assert "return _observableThrow(new Error(\"The parameter 'petId' must be defined.\"))" in code
        assert "throw new Error(\"The parameter" not in code

    def test_output_is_deterministic(self, discussion_spec: dict[str, Any]) -> None:
        first = generate(discussion_spec)
        second = generate(discussion_spec)
        assert first == second


class TestResponses:
    def test_multiple_successes(self, complex_spec: dict[str, Any]) -> None:
        code = generate(complex_spec, generate_client_interfaces=True, rxjs_version=7.8, typescript_version=5.0)
        assert (
            "else if (status === 204) {\n"
            "            return blobToText(responseBlob).pipe(_observableMergeMap((_responseText: string) => {\n"
            "            return _observableOf(null as any);\n"
            "            }));\n"
            "        }"
        ) in code
        assert "requestWithMultipleSuccess(message: Foo): Observable<Foo>" in code
        assert "result200 = Foo.fromJS(resultData200);" in code
        assert "} else if (status !== 200 && status !== 204) {" in code

    def test_no_declared_responses(self, no_response_spec: dict[str, Any]) -> None:
        code = generate(no_response_spec, generate_client_interfaces=True)
        assert "requestWithMultipleSuccess(message: Foo): Observable<void>" in code
        assert "const content_ = JSON.stringify(message);" in code
        assert "JSON.parse" not in code

    def test_error_payload_and_default(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert 'return throwException("Pet not found", status, _responseText, _headers, result404);' in code
        assert "} else {\n" in code
        assert 'return throwException("Unexpected error", status, _responseText, _headers);' in code

    def test_file_response(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert "download(petId: number): Observable<FileResponse>" in code
        assert '"Accept": "application/octet-stream"' in code
        assert "export interface FileResponse {" in code


class TestRequests:
    def test_url_encoded_body(self, url_encoded_spec: dict[str, Any]) -> None:
        code = generate(url_encoded_spec, typescript_version=2.0)
        assert "content_" in code
        assert "FormData" not in code
        assert '"Content-Type": "application/x-www-form-urlencoded"' in code
        assert 'contentPairs_.push(encodeURIComponent("message") + "=" + ' in code
        assert (
            'contentPairs_.push(encodeURIComponent("messageId") + "=" + encodeURIComponent(messageId.toString()));'
        ) in code
        assert 'const content_ = contentPairs_.join("&");' in code

    def test_multipart_body(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert "const content_ = new FormData();" in code
        assert 'content_.append("file", file.data, file.fileName ? file.fileName : "file");' in code
        assert "upload(petId: number, file: FileParameter, caption?: string | undefined)" in code
        assert "export interface FileParameter {" in code

    def test_path_query_and_header(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert 'let url_ = this.baseUrl + "/pets/{petId}?";' in code
        assert 'url_ = url_.replace("{petId}", encodeURIComponent("" + petId));' in code
        assert 'url_ += "since=" + encodeURIComponent(since ? "" + since.toISOString() : "") + "&";' in code
        assert '"X-Trace": xTrace !== undefined && xTrace !== null ? "" + xTrace : ""' in code
        assert "getPet(petId: number, since?: Date | undefined, xTrace?: string | undefined)" in code

    def test_array_query_parameter(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(petstore_spec)
        assert 'tags.forEach(item => { url_ += "tags=" + encodeURIComponent("" + item) + "&"; });' in code


class TestVersionGating:
    def test_rxjs_5_patch_style(self, complex_spec: dict[str, Any]) -> None:
        code = generate(complex_spec, rxjs_version=5.5)
        assert "import 'rxjs/add/operator/mergeMap';" in code
        assert ".flatMap((response_ : any) => {" in code
        assert "Observable.of(null as any)" in code
        assert "_observable" not in code

    def test_rxjs_6_pipeable_style(self, complex_spec: dict[str, Any]) -> None:
        code = generate(complex_spec, rxjs_version=6.0)
        assert "_observableThrow(e)" in code
        assert "_observableThrow(() =>" not in code
        assert "Observable.of" not in code

    def test_rxjs_7_factory_throw(self, complex_spec: dict[str, Any]) -> None:
        code = generate(complex_spec, rxjs_version=7.0)
        assert "_observableThrow(() => e)" in code
        assert "_observableThrow(e)" not in code

    def test_nullish_base_url(self, complex_spec: dict[str, Any]) -> None:
        assert 'this.baseUrl = baseUrl ?? "";' in generate(complex_spec, typescript_version=4.0)
        old = generate(complex_spec, typescript_version=2.0)
        assert 'this.baseUrl = baseUrl !== undefined && baseUrl !== null ? baseUrl : "";' in old

    def test_override_modifier(self, complex_spec: dict[str, Any]) -> None:
        assert "    override message: string;" in generate(complex_spec, typescript_version=4.3)
        assert "override" not in generate(complex_spec, typescript_version=4.2)


class TestGrouping:
    def test_first_tag(self, petstore_spec: dict[str, Any]) -> None:
        petstore_spec["paths"]["/pets"]["get"]["tags"] = ["Store"]
        code = generate(petstore_spec, operation_grouping=OperationGrouping.FIRST_TAG)
        assert "export class StoreClient" in code
        assert "export class Client" in code

    def test_single_client(self, petstore_spec: dict[str, Any]) -> None:
        code = generate(
            petstore_spec, operation_grouping=OperationGrouping.SINGLE_CLIENT, client_class_name="Api{controller}"
        )
        assert "export class Api {" in code
        assert "petsGetPet(" in code

    def test_client_name_clashing_with_schema(self, discussion_spec: dict[str, Any]) -> None:
        discussion_spec["definitions"]["DiscussionClient"] = {"type": "object", "properties": {"id": {}}}
        result = AngularClientGenerator().generate(OASParser().parse_dict(discussion_spec))
        assert "export class DiscussionClient2 {" in result.code
        assert "export class DiscussionClient implements IDiscussionClient {" in result.code
        assert any("DiscussionClient2" in warning for warning in result.warnings)

    def test_custom_base_url_token(self, complex_spec: dict[str, Any]) -> None:
        code = generate(complex_spec, base_url_token="MY_API_URL")
        assert "export const MY_API_URL = new InjectionToken<string>('MY_API_URL');" in code
        assert "@Optional() @Inject(MY_API_URL) baseUrl?: string" in code


class TestGenerationResult:
    def test_warnings_are_returned(self, complex_spec: dict[str, Any]) -> None:
        body = complex_spec["paths"]["/Complex/RequestWithMultipleSuccess"]["post"]["requestBody"]
        body["content"] = {"application/xml": body["content"]["application/json"]}
        result = AngularClientGenerator().generate(OASParser().parse_dict(complex_spec))
        assert len(result.warnings) == 1
        assert result.code.endswith("}\n")

    @pytest.mark.parametrize("grouping", list(OperationGrouping))
    def test_duplicate_method_names_get_suffixes(self, grouping: OperationGrouping) -> None:
        spec = {
            "swagger": "2.0",
            "info": {"title": "t", "version": "1"},
            "paths": {
                "/a": {"get": {"operationId": "Items_Get", "responses": {}}},
                "/b": {"get": {"operationId": "Items_get", "responses": {}}},
            },
        }
        code = generate(spec, operation_grouping=grouping)
        assert code.count("(): Observable<void>") == 2
