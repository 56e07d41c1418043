# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Decoding of Zoho CRM XML responses into typed results.

A response body is decoded in three steps:

1. ``downloadFile`` bodies are opaque bytes and go straight to the file sink.
2. Every other body is parsed, then :func:`classify` walks the ordered
   :data:`RESPONSE_SHAPES` table and picks the first shape whose predicate
   holds. The order matters: an ``<error>`` or ``<nodata>`` node wins over any
   operation-specific shape.
3. The selected decoder builds the result.

Result types by shape:

- ``fields``: ``list`` of :class:`~zoho_crm_client.models.field.FieldDescriptor`
- ``delete_records``, ``upload_file``, ``delete_file``: a single
  :class:`~zoho_crm_client.models.mutation_result.MutationResult`
- ``deleted_ids``: a :class:`~zoho_crm_client.models.record.Record` whose
  ``data`` is the list of ids
- ``records``: ``dict`` row number -> :class:`~zoho_crm_client.models.record.Record`
- ``mutations``: ``dict`` row number -> :class:`~zoho_crm_client.models.mutation_result.MutationResult`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable, ContextManager, Dict, List, Mapping, NamedTuple, Optional, Union

from lxml import etree

from ..common.constants import (
    ATTR_FIELD_NAME,
    ATTR_ROW_NUMBER,
    DEFAULT_RESULT_CODE,
    DELETE_FILE,
    DELETE_RECORDS,
    DOWNLOAD_FILE,
    GET_DELETED_RECORD_IDS,
    GET_FIELDS,
    PARAM_FILE_PATH,
    TAG_FIELD,
    TAG_ROW,
    UPLOAD_FILE,
    UPLOAD_SUCCESS_CODE,
)
from ..core._error_codes import (
    CONFIG_FILE_PATH_MISSING,
    RESPONSE_NOT_WELL_FORMED,
    RESPONSE_UNEXPECTED_SHAPE,
)
from ..core.errors import ConfigurationError, MalformedResponseError, NoDataError, VendorError
from ..models.field import FieldDescriptor
from ..models.mutation_result import MutationResult, ZohoError
from ..models.record import Record

_logger = logging.getLogger(__name__)

RawBody = Union[str, bytes]
FileSink = Callable[[str], ContextManager[BinaryIO]]

# Detail names (spaces stripped) that map onto MutationResult fields.
# Anything else Zoho reports in <details> is ignored.
_SUCCESS_DETAIL_FIELDS: Dict[str, str] = {
    "Id": "id",
    "CreatedTime": "created_time",
    "ModifiedTime": "modified_time",
    "CreatedBy": "created_by",
    "ModifiedBy": "modified_by",
}


@dataclass(frozen=True)
class _CallContext:
    """State of one call, passed explicitly so a transport can be shared."""

    module: str
    method: str
    params: Mapping[str, Any] = field(default_factory=dict)


def open_file_sink(path: str) -> ContextManager[BinaryIO]:
    """Default sink for ``downloadFile``: the file at ``path``, opened for binary writing."""
    return open(path, "wb")


# ---------------------------------------------------------------- XML helpers


def _elements(node: Optional[etree._Element]) -> List[etree._Element]:
    """Child elements of ``node``, skipping comments and processing instructions."""
    if node is None:
        return []
    return [child for child in node if isinstance(child.tag, str)]


def _children(node: Optional[etree._Element], tag: str) -> List[etree._Element]:
    return [child for child in _elements(node) if child.tag == tag]


def _find(node: Optional[etree._Element], *path: str) -> Optional[etree._Element]:
    for tag in path:
        matches = _children(node, tag)
        if not matches:
            return None
        node = matches[0]
    return node


def _text(node: Optional[etree._Element]) -> str:
    # Direct text only; comments and processing instructions split it into tails.
    if node is None:
        return ""
    parts = [node.text or ""]
    parts.extend(child.tail or "" for child in node if not isinstance(child.tag, str))
    return "".join(parts)


def _path_text(node: Optional[etree._Element], *path: str) -> str:
    return _text(_find(node, *path))


def _to_int(value: Optional[str]) -> int:
    try:
        return int((value or "").strip())
    except ValueError:
        return 0


def _vendor_error(node: etree._Element) -> ZohoError:
    return ZohoError(_path_text(node, "code"), _path_text(node, "message"))


def parse_document(raw: RawBody) -> etree._Element:
    """
    Parse a response body.

    :raises MalformedResponseError: If the body is not well-formed XML.
    """
    data = raw.encode("utf-8") if isinstance(raw, str) else raw
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(data, parser)
    except (etree.XMLSyntaxError, ValueError, TypeError) as exc:
        raise MalformedResponseError(
            f"Response is not well-formed XML: {exc}",
            subcode=RESPONSE_NOT_WELL_FORMED,
        ) from exc


# ---------------------------------------------------------------- decoders


def _raise_vendor_error(document: etree._Element, context: _CallContext) -> Any:
    raise VendorError(_vendor_error(_find(document, "error")))


def _raise_no_data(document: etree._Element, context: _CallContext) -> Any:
    raise NoDataError(_vendor_error(_find(document, "nodata")))


def decode_fields(document: etree._Element, context: _CallContext) -> List[FieldDescriptor]:
    """Field metadata listing returned by ``getFields``."""
    fields: List[FieldDescriptor] = []
    for section in _children(document, "section"):
        section_name = section.get("name", "")
        for node in _elements(section):
            label = node.get("label", "")
            fields.append(
                FieldDescriptor(
                    section=section_name,
                    name=node.get("dv") or label,
                    label=label,
                    type=node.get("type", ""),
                    required=node.get("req") == "true",
                    read_only=node.get("isreadonly") == "true",
                    max_length=_to_int(node.get("maxlength")),
                    options=[_text(option) for option in _elements(node)],
                    custom_field=node.get("customfield") == "true",
                    last_modified=node.get("lm") == "true",
                )
            )
    return fields


def decode_delete_records(document: etree._Element, context: _CallContext) -> MutationResult:
    return MutationResult(index=1, code=_path_text(document, "result", "code"))


def decode_upload_file(document: etree._Element, context: _CallContext) -> MutationResult:
    """
    Result of ``uploadFile``.

    Zoho reports the attachment in ``result/recorddetail`` as three ``FL``
    nodes in a fixed order: id, created time, modified time.
    """
    detail = _find(document, "result", "recorddetail")
    if detail is None:
        return MutationResult(index=1, code=DEFAULT_RESULT_CODE)
    values = [_text(node) for node in _children(detail, TAG_FIELD)[:3]]
    values += [""] * (3 - len(values))
    return MutationResult(
        index=1,
        code=UPLOAD_SUCCESS_CODE,
        id=values[0],
        created_time=values[1],
        modified_time=values[2],
    )


def decode_delete_file(document: etree._Element, context: _CallContext) -> MutationResult:
    return MutationResult(index=1, code=_path_text(document, "success", "code"))


def decode_deleted_ids(document: etree._Element, context: _CallContext) -> Record:
    text = _path_text(document, "result", "DeletedIDs").strip()
    ids = [record_id.strip() for record_id in text.split(",")] if text else []
    return Record(data=ids, index=1)


def _row_to_record(row: etree._Element) -> Record:
    # Sub-form fields are rebuilt two levels deep only: field -> item no -> value.
    data: Dict[str, Any] = {}
    for node in _elements(row):
        name = node.get(ATTR_FIELD_NAME, "")
        items = _elements(node)
        if not items:
            data[name] = _text(node)
            continue
        for item in items:
            for subitem in _elements(item):
                nested = data.setdefault(name, {}).setdefault(item.get(ATTR_ROW_NUMBER, ""), {})
                nested[subitem.get(ATTR_FIELD_NAME, "")] = _text(subitem)
    return Record(data=data, index=_to_int(row.get(ATTR_ROW_NUMBER)))


def decode_records(document: etree._Element, context: _CallContext) -> Dict[str, Record]:
    """Record listing under ``result/<module>``, keyed by row number."""
    records: Dict[str, Record] = {}
    for row in _children(_find(document, "result", context.module), TAG_ROW):
        records[row.get(ATTR_ROW_NUMBER, "")] = _row_to_record(row)
    return records


def _success_result(no: str, success: etree._Element) -> MutationResult:
    details: Dict[str, str] = {}
    for node in _elements(_find(success, "details")):
        attr = _SUCCESS_DETAIL_FIELDS.get(node.get(ATTR_FIELD_NAME, "").replace(" ", ""))
        if attr is not None:
            details[attr] = _text(node)
    return MutationResult(index=_to_int(no), code=_path_text(success, "code"), **details)


def _error_result(no: str, error: Optional[etree._Element]) -> MutationResult:
    code = _path_text(error, "code")
    return MutationResult(
        index=_to_int(no),
        code=code,
        error=ZohoError(code, _path_text(error, "details")),
    )


def decode_mutations(document: etree._Element, context: _CallContext) -> Dict[str, MutationResult]:
    """Per-row results of ``insertRecords`` / ``updateRecords``, keyed by row number."""
    results: Dict[str, MutationResult] = {}
    for row in _children(_find(document, "result"), TAG_ROW):
        no = row.get(ATTR_ROW_NUMBER, "")
        success = _find(row, "success")
        if success is not None:
            results[no] = _success_result(no, success)
        else:
            results[no] = _error_result(no, _find(row, "error"))
    return results


# ---------------------------------------------------------------- classification

Predicate = Callable[[etree._Element, _CallContext], bool]
Decoder = Callable[[etree._Element, _CallContext], Any]


class ResponseShape(NamedTuple):
    name: str
    predicate: Predicate
    decoder: Decoder


def _has_child(tag: str) -> Predicate:
    return lambda document, context: _find(document, tag) is not None


def _is_method(method: str) -> Predicate:
    return lambda document, context: context.method == method


def _has_module_listing(document: etree._Element, context: _CallContext) -> bool:
    return _find(document, "result", context.module) is not None


def _has_mutation_rows(document: etree._Element, context: _CallContext) -> bool:
    return any(
        _find(row, "success") is not None or _find(row, "error") is not None
        for row in _children(_find(document, "result"), TAG_ROW)
    )


RESPONSE_SHAPES = (
    ResponseShape("error", _has_child("error"), _raise_vendor_error),
    ResponseShape("nodata", _has_child("nodata"), _raise_no_data),
    ResponseShape("fields", _is_method(GET_FIELDS), decode_fields),
    ResponseShape("delete_records", _is_method(DELETE_RECORDS), decode_delete_records),
    ResponseShape("upload_file", _is_method(UPLOAD_FILE), decode_upload_file),
    ResponseShape("delete_file", _is_method(DELETE_FILE), decode_delete_file),
    ResponseShape("deleted_ids", _is_method(GET_DELETED_RECORD_IDS), decode_deleted_ids),
    ResponseShape("records", _has_module_listing, decode_records),
    ResponseShape("mutations", _has_mutation_rows, decode_mutations),
)
"""Response shapes in priority order; the first matching predicate wins."""


def classify(document: etree._Element, context: _CallContext) -> ResponseShape:
    """
    Select the response shape for a parsed document.

    :raises MalformedResponseError: If no shape matches.
    """
    for shape in RESPONSE_SHAPES:
        if shape.predicate(document, context):
            return shape
    raise MalformedResponseError(
        f"Response to {context.module}/{context.method} doesn't contain expected fields.",
        subcode=RESPONSE_UNEXPECTED_SHAPE,
        details={"module": context.module, "method": context.method, "root": document.tag},
    )


def decode_download(raw: RawBody, context: _CallContext, sink: FileSink = open_file_sink) -> bool:
    """
    Write a ``downloadFile`` body to ``params['file_path']``.

    :return: ``True`` if any bytes were written.
    :raises ConfigurationError: If no destination path was supplied.
    """
    path = context.params.get(PARAM_FILE_PATH)
    if not path:
        raise ConfigurationError(
            "Missing file path for downloadFile; set the 'file_path' parameter.",
            subcode=CONFIG_FILE_PATH_MISSING,
        )
    data = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw or b"")
    with sink(path) as fp:
        fp.write(data)
    return len(data) > 0


def decode_response(raw: RawBody, context: _CallContext, sink: Optional[FileSink] = None) -> Any:
    """Decode one raw response body for the call described by ``context``."""
    if context.method == DOWNLOAD_FILE:
        return decode_download(raw, context, sink or open_file_sink)

    document = parse_document(raw)
    shape = classify(document, context)
    _logger.debug(
        f"Decoding {context.module}/{context.method} response as {shape.name}",
        extra={"zoho_module": context.module, "zoho_method": context.method},
    )
    return shape.decoder(document, context)


__all__ = [
    "RESPONSE_SHAPES",
    "ResponseShape",
    "classify",
    "decode_download",
    "decode_response",
    "open_file_sink",
    "parse_document",
]
