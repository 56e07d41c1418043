# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with retry logic, timeout defaults, and optional session support.

This module provides :class:`~zoho_crm_client.core._http._HttpClient`, a thin
wrapper around the requests library used by
:class:`~zoho_crm_client.data._transport.HttpTransport`. Network failures are
retried with exponential backoff; HTTP status handling is left to the caller.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import requests

# Uploads and batch inserts can be slow; reads are expected to be quick.
_SLOW_METHODS = ("post", "put", "delete")


class _HttpClient:
    """
    HTTP client with configurable retry logic, timeout handling, and optional session support.

    :param retries: Maximum number of attempts for network errors. Default is 5.
    :type retries: :class:`int` | None
    :param backoff: Base delay in seconds between attempts. Default is 0.5.
    :type backoff: :class:`float` | None
    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session reused for every request.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.max_attempts = max(1, retries if retries is not None else 5)
        self.base_delay = backoff if backoff is not None else 0.5
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def _timeout_for(self, method: str) -> float:
        if self.default_timeout is not None:
            return self.default_timeout
        return 120 if (method or "").lower() in _SLOW_METHODS else 30

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute an HTTP request, retrying network errors with exponential backoff.

        :param method: HTTP method (GET, POST, ...).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, such as ``data`` and ``files``.
        :return: HTTP response object, whatever its status code.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: If every attempt fails.
        """
        kwargs.setdefault("timeout", self._timeout_for(method))

        for attempt in range(self.max_attempts):
            try:
                if self._session is not None:
                    return self._session.request(method, url, **kwargs)
                return requests.request(method, url, **kwargs)
            except requests.exceptions.RequestException:
                if attempt == self.max_attempts - 1:
                    raise
                time.sleep(self.base_delay * (2**attempt))
        raise RuntimeError("Unexpected end of retry loop")

    def close(self) -> None:
        """Close the session, if any. Safe to call multiple times."""
        if self._session is not None:
            self._session.close()
            self._session = None
