# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Per-row outcome of mutation operations.

A batch insert or update can partially succeed, so failures on individual
rows are reported as data (a :class:`MutationResult` with an attached
:class:`ZohoError`) rather than raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ZohoError:
    """
    Error (code, message) pair reported by Zoho.

    :param code: Vendor error code, e.g. ``"4600"``.
    :type code: str
    :param message: Human readable message or details.
    :type message: str
    """

    code: str
    message: str = ""


@dataclass(frozen=True)
class MutationResult:
    """
    Result of a create/update/delete/upload operation on one row.

    :param index: 1-based row position in the originating batch (``1`` for
        single-row operations).
    :type index: int
    :param code: Vendor result code. Informational only; see :attr:`is_success`.
    :type code: str
    :param error: Row-level error, ``None`` when the row succeeded.
    :type error: ~zoho_crm_client.models.mutation_result.ZohoError | None

    The remaining fields are populated only when Zoho returned the
    corresponding detail.

    Example::

        results = client.call("Leads", "insertRecords", {"xmlData": rows})
        for no, result in results.items():
            if result.is_success:
                print(no, result.id)
            else:
                print(no, result.error.code, result.error.message)
    """

    index: int
    code: str
    error: Optional[ZohoError] = None
    id: Optional[str] = None
    created_time: Optional[str] = None
    modified_time: Optional[str] = None
    created_by: Optional[str] = None
    modified_by: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "code": self.code,
            "error": None if self.error is None else {"code": self.error.code, "message": self.error.message},
            "id": self.id,
            "created_time": self.created_time,
            "modified_time": self.modified_time,
            "created_by": self.created_by,
            "modified_by": self.modified_by,
        }


__all__ = ["MutationResult", "ZohoError"]
