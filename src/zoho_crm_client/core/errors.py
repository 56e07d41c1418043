# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exception hierarchy for the Zoho CRM client.

Every error raised by the client derives from :class:`ZohoCRMError`. Errors
reported by Zoho itself carry the vendor's (code, message) pair as a
:class:`~zoho_crm_client.models.mutation_result.ZohoError`.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ..models.mutation_result import ZohoError
from ._error_codes import _http_subcode


class ZohoCRMError(Exception):
    """Base structured error for the Zoho CRM client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class EncodingError(ZohoCRMError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="encoding_error", subcode=subcode, details=details, source="client")


class ConfigurationError(ZohoCRMError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="configuration_error", subcode=subcode, details=details, source="client")


class MalformedResponseError(ZohoCRMError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="malformed_response", subcode=subcode, details=details, source="server")


class VendorError(ZohoCRMError):
    """Zoho answered with a top-level ``<error>`` node."""

    def __init__(self, error: ZohoError) -> None:
        super().__init__(
            error.message or f"Zoho error {error.code}",
            code="vendor_error",
            subcode=error.code,
            source="server",
        )
        self.error = error


class NoDataError(ZohoCRMError):
    """
    Zoho answered with a ``<nodata>`` node.

    Kept apart from :class:`VendorError` so callers can treat it as an empty
    result set::

        try:
            records = client.call("Leads", "searchRecords", {"criteria": "(Email:x@y.z)"})
        except NoDataError:
            records = {}
    """

    def __init__(self, error: ZohoError) -> None:
        super().__init__(
            error.message or f"No data ({error.code})",
            code="no_data",
            subcode=error.code,
            source="server",
        )
        self.error = error


class HttpError(ZohoCRMError):
    def __init__(
        self,
        message: str,
        status_code: int,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(
            message,
            code="http_error",
            subcode=_http_subcode(status_code),
            status_code=status_code,
            details=d,
            source="server",
        )


__all__ = [
    "ZohoCRMError",
    "EncodingError",
    "ConfigurationError",
    "MalformedResponseError",
    "VendorError",
    "NoDataError",
    "HttpError",
]
