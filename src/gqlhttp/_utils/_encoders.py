"""Request body encoders, one per EncodingMode.

Each encoder turns a Request into a RequestSpec and reports what it sent
through ``log``. Encoders do not check file/mode compatibility; the client does
that before dispatching.
"""

import json
import os
from typing import Any, Callable, Dict, List, Optional, Tuple

from .._config import EncodingMode
from ..models.errors import VariablesNotSupportedError
from ..models.request import File, Request
from ._errors import encoding_errors
from ._request_spec import RequestSpec
from ._sanitize import preview
from .constants import (
    CONTENT_TYPE_JSON,
    FIELD_MAP,
    FIELD_OPERATIONS,
    FIELD_QUERY,
    FIELD_VARIABLES,
    FILES_VARIABLE_PATH,
)

LogFn = Callable[[str], None]
Part = Tuple[str, Tuple[Optional[str], Any]]


def multipart_content_type(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"


def new_boundary() -> str:
    return os.urandom(16).hex()


def _field(name: str, value: str) -> Part:
    # httpx renders a part without a filename as a plain form field
    return (name, (None, value))


def _file_parts(files: Tuple[File, ...]) -> List[Part]:
    return [(f.field, (f.name, f.content)) for f in files]


def encode_json(request: Request, log: LogFn) -> RequestSpec:
    variables = request.variables
    with encoding_errors("request body"):
        body = json.dumps({"query": request.query, "variables": variables})

    log(f">> variables: {preview(json.dumps(variables, default=str))}")
    log(f">> query: {preview(request.query)}")

    return RequestSpec(content_type=CONTENT_TYPE_JSON, content=body.encode("utf-8"))


def encode_multipart_form(request: Request, log: LogFn) -> RequestSpec:
    parts: List[Part] = [_field(FIELD_QUERY, request.query)]

    variables_json = ""
    variables = request.variables
    if variables:
        with encoding_errors("variables"):
            variables_json = json.dumps(variables)
        parts.append(_field(FIELD_VARIABLES, variables_json))

    parts.extend(_file_parts(request.files))

    log(f">> variables: {preview(variables_json)}")
    log(f">> files: {len(request.files)}")
    log(f">> query: {preview(request.query)}")

    return RequestSpec(
        content_type=multipart_content_type(new_boundary()),
        files=parts,
    )


def build_operations_and_map(
    request: Request,
) -> Tuple[Dict[str, Any], Dict[str, List[str]]]:
    """Build the ``operations`` and ``map`` objects of the multipart request spec.

    Every file gets a null placeholder in ``variables.files`` at its position in
    the request, and ``map`` points the file's field at that placeholder. With
    no files ``variables`` is an empty object and ``map`` is empty.

    Examples:
        >>> req = Request("mutation { upload }")
        >>> req.file("a", "a.txt", b"A")
        >>> req.file("b", "b.txt", b"B")
        >>> build_operations_and_map(req)
        ({'query': 'mutation { upload }', 'variables': {'files': [None, None]}}, {'a': ['variables.files.0'], 'b': ['variables.files.1']})
    """
    files = request.files
    variables: Dict[str, Any] = {}
    file_map: Dict[str, List[str]] = {}

    if files:
        variables["files"] = [None] * len(files)
        for index, f in enumerate(files):
            file_map[f.field] = [f"{FILES_VARIABLE_PATH}.{index}"]

    operations = {"query": request.query, "variables": variables}
    return operations, file_map


def encode_multipart_request_spec(request: Request, log: LogFn) -> RequestSpec:
    if request.variables:
        raise VariablesNotSupportedError()

    operations_obj, map_obj = build_operations_and_map(request)
    with encoding_errors("operations"):
        operations = json.dumps(operations_obj)
    with encoding_errors("map"):
        file_map = json.dumps(map_obj)

    parts: List[Part] = [
        _field(FIELD_OPERATIONS, operations),
        _field(FIELD_MAP, file_map),
    ]
    log(f">> field: {FIELD_OPERATIONS} = {preview(operations)}")
    log(f">> field: {FIELD_MAP} = {preview(file_map)}")

    parts.extend(_file_parts(request.files))
    for f in request.files:
        log(f">> file: {f.field} = {f.name}")

    return RequestSpec(
        content_type=multipart_content_type(new_boundary()),
        files=parts,
    )


ENCODERS: Dict[EncodingMode, Callable[[Request, LogFn], RequestSpec]] = {
    EncodingMode.JSON: encode_json,
    EncodingMode.MULTIPART_FORM: encode_multipart_form,
    EncodingMode.MULTIPART_REQUEST_SPEC: encode_multipart_request_spec,
}


def encode(mode: EncodingMode, request: Request, log: LogFn) -> RequestSpec:
    return ENCODERS[mode](request, log)
