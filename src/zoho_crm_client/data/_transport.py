# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Transports carrying a single Zoho CRM API call.

A transport exposes ``call(module, method, params)`` and returns the raw
response body. :class:`HttpTransport` performs the HTTP round trip;
:class:`LoggingTransport` decorates any transport with request logging.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Protocol, Union, runtime_checkable

from ..common.constants import PARAM_CONTENT, PARAM_FILE_PATH
from ..core._http import _HttpClient
from ..core.config import DEFAULT_BASE_URL
from ..core.errors import HttpError


@runtime_checkable
class Transport(Protocol):
    """Protocol implemented by every transport."""

    def call(self, module: str, method: str, params: Mapping[str, Any]) -> Union[str, bytes]:
        """Send one API call and return the raw response body."""
        ...


class HttpTransport:
    """
    Transport posting form parameters to ``{base_url}/{module}/{method}``.

    :param base_url: Root of the XML API, e.g. ``"https://crm.zoho.com/crm/private/xml"``.
    :type base_url: str
    :param default_params: Parameters merged into every call (for example a
        pre-issued ``authtoken`` and ``scope``). Call parameters win on conflict.
    :type default_params: dict[str, Any] | None
    :param http: HTTP client to send requests with.
    :type http: ~zoho_crm_client.core._http._HttpClient | None

    :raises ValueError: If ``base_url`` is empty.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        default_params: Optional[Mapping[str, Any]] = None,
        http: Optional[_HttpClient] = None,
    ) -> None:
        self._base_url = (base_url or "").rstrip("/")
        if not self._base_url:
            raise ValueError("base_url is required.")
        self._default_params: Dict[str, Any] = dict(default_params or {})
        self._http = http or _HttpClient()

    def _url(self, module: str, method: str) -> str:
        return f"{self._base_url}/{module}/{method}"

    def call(self, module: str, method: str, params: Mapping[str, Any]) -> bytes:
        """
        POST one API call.

        A ``content`` parameter is sent as a multipart file; ``file_path`` is a
        local destination and never leaves the process.

        :return: Raw response body.
        :rtype: bytes
        :raises HttpError: If Zoho answers with an HTTP status of 400 or above.
        :raises requests.exceptions.RequestException: If the request cannot be sent.
        """
        data = {**self._default_params, **params}
        data.pop(PARAM_FILE_PATH, None)
        content = data.pop(PARAM_CONTENT, None)
        files = {PARAM_CONTENT: content} if content is not None else None

        response = self._http._request("POST", self._url(module, method), data=data, files=files)
        if response.status_code >= 400:
            raise HttpError(
                f"Zoho CRM {module}/{method} failed with HTTP {response.status_code}",
                status_code=response.status_code,
                body_excerpt=(response.text or "")[:200],
            )
        return response.content

    def close(self) -> None:
        self._http.close()


class LoggingTransport:
    """
    Transport decorator logging each call and its duration.

    Only parameter names are logged; values may hold tokens or personal data.

    :param transport: Transport to decorate.
    :param logger: Logger to write to. Defaults to the ``zoho_crm_client`` logger.
    :type logger: logging.Logger | None
    """

    def __init__(self, transport: Transport, logger: Optional[logging.Logger] = None) -> None:
        self._transport = transport
        self._logger = logger or logging.getLogger("zoho_crm_client")

    def call(self, module: str, method: str, params: Mapping[str, Any]) -> Union[str, bytes]:
        extra = {"zoho_module": module, "zoho_method": method}
        self._logger.debug(f"{module}/{method} params={sorted(params)}", extra=extra)
        start = time.perf_counter()
        try:
            body = self._transport.call(module, method, params)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            self._logger.warning(f"{module}/{method} failed after {duration_ms:.1f}ms: {exc}", extra=extra)
            raise
        duration_ms = (time.perf_counter() - start) * 1000
        self._logger.debug(f"{module}/{method} {len(body or b'')} bytes {duration_ms:.1f}ms", extra=extra)
        return body

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()


__all__ = ["Transport", "HttpTransport", "LoggingTransport"]
