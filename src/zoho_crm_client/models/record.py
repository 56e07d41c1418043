# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record data model for Zoho CRM rows.

Provides an immutable representation of a decoded row with read-only
dict-like access to its fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Union

# Type aliases for semantic clarity
RowNumber = int  # 1-based position in the batch or listing

RecordData = Union[Dict[str, Any], List[str]]


@dataclass(frozen=True)
class Record:
    """
    Immutable row returned by a record listing.

    :param data: Field values keyed by field name. Sub-form fields map to a
        two-level dict ``{item_no: {field: value}}``. For deleted-id listings
        ``data`` is the ordered list of ids instead.
    :type data: dict[str, Any] | list[str]
    :param index: 1-based row number (the ``no`` attribute on the wire).
    :type index: int

    Example:
        Field access::

            records = client.call("Leads", "getRecords", {"fromIndex": 1, "toIndex": 20})
            lead = records["1"]
            print(lead["Company"])
            if "Email" in lead:
                print(lead["Email"])
    """

    data: RecordData = field(default_factory=dict)
    index: RowNumber = 1

    def __getitem__(self, key: Any) -> Any:
        """
        Dictionary-like field access.

        :param key: Field name (or list position for deleted-id records).
        :return: Field value.
        :raises KeyError: If the field doesn't exist.
        """
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a field value with optional default.

        :param key: Field name to access.
        :type key: str
        :param default: Default value if field doesn't exist.
        :return: Field value or default.
        """
        if isinstance(self.data, dict):
            return self.data.get(key, default)
        return default

    def keys(self):
        if isinstance(self.data, dict):
            return self.data.keys()
        return range(len(self.data))

    def items(self):
        if isinstance(self.data, dict):
            return self.data.items()
        return enumerate(self.data)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain dictionary of field data.

        :return: Copy of the field data; deleted-id records are keyed by list position.
        :rtype: dict[str, Any]
        """
        if isinstance(self.data, dict):
            return dict(self.data)
        return {str(i): v for i, v in enumerate(self.data)}


__all__ = ["Record", "RecordData", "RowNumber"]
