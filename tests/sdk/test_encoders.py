import io
import json
from typing import List

import httpx
import pytest

from gqlhttp import EncodingError, Request, VariablesNotSupportedError
from gqlhttp._config import EncodingMode
from gqlhttp._utils import (
    ENCODERS,
    build_operations_and_map,
    encode,
    encode_json,
    encode_multipart_form,
    encode_multipart_request_spec,
)
from gqlhttp._utils._request_spec import RequestSpec
from tests.utils.multipart import parse_multipart


def to_http_request(spec: RequestSpec) -> httpx.Request:
    if spec.files:
        return httpx.Request(
            spec.method,
            "https://example.com/graphql",
            files=spec.files,
            headers={"Content-Type": spec.content_type},
        )
    return httpx.Request(
        spec.method,
        "https://example.com/graphql",
        content=spec.content,
        headers={"Content-Type": spec.content_type},
    )


@pytest.fixture
def logged() -> List[str]:
    return []


class TestEncodeJson:
    def test_body_and_content_type(self, logged: List[str]):
        req = Request("query ($key: String!) { items(id: $key) { id } }")
        req.var("key", "value")

        spec = encode_json(req, logged.append)

        assert spec.method == "POST"
        assert spec.content_type == "application/json; charset=utf-8"
        assert spec.files == []
        assert json.loads(spec.content) == {
            "query": "query ($key: String!) { items(id: $key) { id } }",
            "variables": {"key": "value"},
        }

    def test_empty_variables_serialize_as_object(self, logged: List[str]):
        spec = encode_json(Request("query { hero { name } }"), logged.append)

        assert json.loads(spec.content) == {
            "query": "query { hero { name } }",
            "variables": {},
        }

    def test_logs_query_and_variables(self, logged: List[str]):
        req = Request("query { a }")
        req.var("x", 1)

        encode_json(req, logged.append)

        assert logged == ['>> variables: {"x": 1}', ">> query: query { a }"]

    def test_unserializable_variable(self, logged: List[str]):
        req = Request("query { a }")
        req.var("x", object())

        with pytest.raises(EncodingError, match="failed to encode request body") as e:
            encode_json(req, logged.append)

        assert isinstance(e.value.__cause__, TypeError)


class TestEncodeMultipartForm:
    def test_query_variables_and_files(self, logged: List[str]):
        req = Request("mutation ($x: Int!) { upload(x: $x) }")
        req.var("x", 1)
        req.file("a", "a.txt", io.BytesIO(b"file a"))
        req.file("b", "b.bin", io.BytesIO(b"file b"))

        spec = encode_multipart_form(req, logged.append)
        parts = parse_multipart(to_http_request(spec))

        assert spec.content_type.startswith("multipart/form-data; boundary=")
        assert [(name, filename) for name, filename, _ in parts] == [
            ("query", None),
            ("variables", None),
            ("a", "a.txt"),
            ("b", "b.bin"),
        ]
        assert parts[0][2] == b"mutation ($x: Int!) { upload(x: $x) }"
        assert json.loads(parts[1][2]) == {"x": 1}
        assert parts[2][2] == b"file a"
        assert parts[3][2] == b"file b"

    def test_variables_omitted_when_empty(self, logged: List[str]):
        req = Request("mutation { upload }")
        req.file("a", "a.txt", b"content")

        parts = parse_multipart(to_http_request(encode_multipart_form(req, logged.append)))

        assert [name for name, _, _ in parts] == ["query", "a"]

    def test_multipart_without_files(self, logged: List[str]):
        req = Request("query { a }")
        req.var("x", "y")

        http_request = to_http_request(encode_multipart_form(req, logged.append))
        parts = parse_multipart(http_request)

        assert [name for name, _, _ in parts] == ["query", "variables"]

    def test_duplicate_fields_preserved_in_order(self, logged: List[str]):
        req = Request("mutation { upload }")
        req.file("doc", "1.txt", b"one")
        req.file("doc", "2.txt", b"two")

        parts = parse_multipart(to_http_request(encode_multipart_form(req, logged.append)))

        assert [(n, f, d) for n, f, d in parts[1:]] == [
            ("doc", "1.txt", b"one"),
            ("doc", "2.txt", b"two"),
        ]

    def test_logs(self, logged: List[str]):
        req = Request("query { a }")
        req.var("x", 1)
        req.file("a", "a.txt", b"A")

        encode_multipart_form(req, logged.append)

        assert logged == ['>> variables: {"x": 1}', ">> files: 1", ">> query: query { a }"]

    def test_unserializable_variable(self, logged: List[str]):
        req = Request("query { a }")
        req.var("when", {1, 2})

        with pytest.raises(EncodingError, match="failed to encode variables"):
            encode_multipart_form(req, logged.append)


class TestBuildOperationsAndMap:
    def test_no_files(self):
        operations, file_map = build_operations_and_map(Request("query { a }"))

        assert operations == {"query": "query { a }", "variables": {}}
        assert file_map == {}

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_placeholders_follow_file_order(self, count: int):
        req = Request("mutation ($files: [Upload!]!) { upload(files: $files) }")
        for i in range(count):
            req.file(f"file{i}", f"{i}.txt", b"x")

        operations, file_map = build_operations_and_map(req)

        assert operations["variables"] == {"files": [None] * count}
        assert file_map == {
            f"file{i}": [f"variables.files.{i}"] for i in range(count)
        }

    def test_duplicate_field_keeps_last_index(self):
        req = Request("mutation { upload }")
        req.file("doc", "1.txt", b"one")
        req.file("doc", "2.txt", b"two")

        operations, file_map = build_operations_and_map(req)

        assert operations["variables"] == {"files": [None, None]}
        assert file_map == {"doc": ["variables.files.1"]}


class TestEncodeMultipartRequestSpec:
    def test_operations_map_and_files(self, logged: List[str]):
        req = Request("mutation ($files: [Upload!]!) { upload(files: $files) }")
        req.file("0", "a.txt", io.BytesIO(b"A"))
        req.file("1", "b.txt", io.BytesIO(b"B"))

        spec = encode_multipart_request_spec(req, logged.append)
        parts = parse_multipart(to_http_request(spec))

        assert [(name, filename) for name, filename, _ in parts] == [
            ("operations", None),
            ("map", None),
            ("0", "a.txt"),
            ("1", "b.txt"),
        ]
        assert json.loads(parts[0][2]) == {
            "query": "mutation ($files: [Upload!]!) { upload(files: $files) }",
            "variables": {"files": [None, None]},
        }
        assert json.loads(parts[1][2]) == {
            "0": ["variables.files.0"],
            "1": ["variables.files.1"],
        }
        assert parts[2][2] == b"A"
        assert parts[3][2] == b"B"

    def test_no_files(self, logged: List[str]):
        spec = encode_multipart_request_spec(Request("query { a }"), logged.append)
        parts = parse_multipart(to_http_request(spec))

        assert [name for name, _, _ in parts] == ["operations", "map"]
        assert json.loads(parts[0][2]) == {"query": "query { a }", "variables": {}}
        assert json.loads(parts[1][2]) == {}

    def test_rejects_variables(self, logged: List[str]):
        req = Request("mutation { upload }")
        req.var("x", 1)
        req.file("a", "a.txt", b"A")

        with pytest.raises(VariablesNotSupportedError, match="graphql-multipart-request-spec"):
            encode_multipart_request_spec(req, logged.append)

        assert logged == []

    def test_logs(self, logged: List[str]):
        req = Request("mutation { upload }")
        req.file("a", "a.txt", b"A")

        encode_multipart_request_spec(req, logged.append)

        assert logged == [
            '>> field: operations = {"query": "mutation { upload }", "variables": {"files": [null]}}',
            '>> field: map = {"a": ["variables.files.0"]}',
            ">> file: a = a.txt",
        ]


class TestEncode:
    def test_every_mode_has_an_encoder(self):
        assert set(ENCODERS) == set(EncodingMode)

    @pytest.mark.parametrize(
        "mode, expected_prefix",
        [
            (EncodingMode.JSON, "application/json"),
            (EncodingMode.MULTIPART_FORM, "multipart/form-data"),
            (EncodingMode.MULTIPART_REQUEST_SPEC, "multipart/form-data"),
        ],
    )
    def test_dispatch(self, mode: EncodingMode, expected_prefix: str, logged: List[str]):
        spec = encode(mode, Request("query { a }"), logged.append)

        assert spec.content_type.startswith(expected_prefix)
