# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Encoding of records into the Zoho CRM ``xmlData`` request format::

    <Leads>
        <row no="1">
            <FL val="Company">Contoso</FL>
            <FL val="Product Details">
                <product no="1">
                    <FL val="Product Id">42</FL>
                </product>
            </FL>
        </row>
    </Leads>

A field value is a scalar, a date/datetime, or a nested list/mapping
(sub-form). Nested entries that are themselves lists, mappings or records become
sub-nodes tagged by their ``@type`` key; scalar entries become ``FL`` leaves.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from lxml import etree

from ..common.constants import (
    ATTR_FIELD_NAME,
    ATTR_ROW_NUMBER,
    DATE_FORMAT,
    DATETIME_FORMAT,
    DEFAULT_NESTED_TAG,
    NESTED_TYPE_KEY,
    TAG_FIELD,
    TAG_ROW,
)
from ..core._error_codes import ENCODING_INVALID_TAG, ENCODING_INVALID_TEXT
from ..core.errors import EncodingError
from ..models.record import Record


def encode_records(module: str, records: Sequence[Any]) -> str:
    """
    Serialize records into the XML document expected by ``xmlData``.

    :param module: Module name, used as the root element (e.g. ``"Leads"``).
    :type module: str
    :param records: Ordered records; each is a mapping or a
        :class:`~zoho_crm_client.models.record.Record`. Row numbers are the
        1-based list positions.
    :type records: Sequence[Mapping[str, Any]]
    :return: XML document as text.
    :rtype: str
    :raises EncodingError: If the module or a field name is not a valid XML
        name, a value cannot be represented in XML, or ``records`` is not a
        sequence of mappings.
    """
    if isinstance(records, (Mapping, str, bytes)) or not isinstance(records, Iterable):
        raise EncodingError("xmlData must be a list of records.")

    root = _new_root(module)
    for position, record in enumerate(records, start=1):
        row = _sub_element(root, TAG_ROW, position)
        for name, value in _record_fields(record, position):
            _append_field(row, name, value)
    return etree.tostring(root, encoding="unicode")


def format_value(value: Any) -> str:
    """
    Render a scalar field value as element text.

    Datetimes at exactly midnight and plain dates use ``MM/DD/YYYY``; any
    other datetime uses ``YYYY-MM-DD HH:mm:ss``. Booleans become
    ``"true"``/``"false"`` and ``None`` an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, _dt.datetime):
        if (value.hour, value.minute, value.second) == (0, 0, 0):
            return value.strftime(DATE_FORMAT)
        return value.strftime(DATETIME_FORMAT)
    if isinstance(value, _dt.date):
        return value.strftime(DATE_FORMAT)
    return str(value)


def _record_fields(record: Any, position: int) -> Iterable[Tuple[Any, Any]]:
    if isinstance(record, (Mapping, Record)):
        return record.items()
    raise EncodingError(
        f"Record at row {position} must be a mapping, got {type(record).__name__}.",
        details={"row": position},
    )


def _is_nested(value: Any) -> bool:
    return isinstance(value, (Mapping, Record, list, tuple))


def _nested_entries(value: Any, strip_type: bool = False) -> List[Tuple[Any, Any]]:
    # @type is consumed only by the node it tags; at field level it is a plain leaf.
    if isinstance(value, (Mapping, Record)):
        return [(k, v) for k, v in value.items() if not (strip_type and k == NESTED_TYPE_KEY)]
    return list(enumerate(value))


def _nested_tag(entry: Any) -> str:
    if isinstance(entry, (Mapping, Record)):
        return str(entry.get(NESTED_TYPE_KEY) or DEFAULT_NESTED_TAG)
    return DEFAULT_NESTED_TAG


def _append_field(row: etree._Element, name: Any, value: Any) -> None:
    node = _sub_element(row, TAG_FIELD, field_name=name)
    if _is_nested(value):
        _append_nested(node, value)
    else:
        _set_text(node, value)


def _append_nested(parent: etree._Element, value: Any, strip_type: bool = False) -> None:
    for position, (key, entry) in enumerate(_nested_entries(value, strip_type), start=1):
        if _is_nested(entry):
            _append_item(parent, _nested_tag(entry), position, entry)
        else:
            leaf = _sub_element(parent, TAG_FIELD, field_name=key)
            _set_text(leaf, entry)


def _append_item(parent: etree._Element, tag: str, position: int, entry: Any) -> None:
    node = _sub_element(parent, tag, position)
    _append_nested(node, entry, strip_type=True)


def _new_root(module: str) -> etree._Element:
    try:
        return etree.Element(str(module))
    except ValueError as exc:
        raise EncodingError(
            f"Invalid module name {module!r}: {exc}",
            subcode=ENCODING_INVALID_TAG,
            details={"tag": module},
        ) from exc


def _sub_element(
    parent: etree._Element,
    tag: str,
    position: Optional[int] = None,
    *,
    field_name: Any = None,
) -> etree._Element:
    attrib = {}
    if position is not None:
        attrib[ATTR_ROW_NUMBER] = str(position)
    if field_name is not None:
        attrib[ATTR_FIELD_NAME] = str(field_name)
    try:
        return etree.SubElement(parent, tag, attrib)
    except ValueError as exc:
        raise EncodingError(
            f"Cannot encode element {tag!r} ({field_name!r}): {exc}",
            subcode=ENCODING_INVALID_TAG,
            details={"tag": tag, "field": field_name},
        ) from exc


def _set_text(node: etree._Element, value: Any) -> None:
    try:
        node.text = format_value(value)
    except ValueError as exc:
        raise EncodingError(
            f"Value of field {node.get(ATTR_FIELD_NAME)!r} cannot be represented in XML: {exc}",
            subcode=ENCODING_INVALID_TEXT,
            details={"field": node.get(ATTR_FIELD_NAME)},
        ) from exc


__all__ = ["encode_records", "format_value"]
