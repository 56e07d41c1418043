# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from .core._http import _HttpClient
from .core.config import ZohoCRMConfig
from .data._decoding import FileSink
from .data._transport import HttpTransport, LoggingTransport, Transport
from .data._xml_transport import XmlDataTransport


class ZohoCRMClient:
    """
    High-level client for the Zoho CRM XML API.

    Calls are encoded, sent and decoded by an internal
    :class:`~zoho_crm_client.data._xml_transport.XmlDataTransport`, created
    lazily on first use.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager reuses one HTTP session for
        every call and closes it on exit::

            with ZohoCRMClient(default_params={"authtoken": token, "scope": "crmapi"}) as client:
                fields = client.call("Leads", "getFields")
                results = client.call("Leads", "insertRecords", {"xmlData": [{"Company": "Contoso"}]})

    :param config: Optional configuration for base URL, timeouts, retries and logging.
        If not provided, defaults are loaded from :meth:`~zoho_crm_client.core.config.ZohoCRMConfig.from_env`.
    :type config: ~zoho_crm_client.core.config.ZohoCRMConfig or None
    :param transport: Transport used instead of the default HTTP transport.
        An injected transport is not closed by :meth:`close`.
    :type transport: ~zoho_crm_client.data._transport.Transport or None
    :param default_params: Parameters merged into every HTTP call, such as a
        pre-issued ``authtoken``. Ignored when ``transport`` is given.
    :type default_params: dict or None
    :param file_sink: Opens ``downloadFile`` destinations for binary writing.
    :type file_sink: Callable[[str], ContextManager[BinaryIO]] or None
    """

    def __init__(
        self,
        config: Optional[ZohoCRMConfig] = None,
        *,
        transport: Optional[Transport] = None,
        default_params: Optional[Mapping[str, Any]] = None,
        file_sink: Optional[FileSink] = None,
    ) -> None:
        self._config = config or ZohoCRMConfig.from_env()
        self._transport = transport
        self._default_params = dict(default_params or {})
        self._file_sink = file_sink
        self._xml: Optional[XmlDataTransport] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False
        self._logger = logging.getLogger(self._config.logger_name)
        if self._config.enable_logging:
            self._logger.setLevel(getattr(logging, self._config.log_level.upper()))

    def __enter__(self) -> "ZohoCRMClient":
        """
        Enter the context manager.

        Creates an HTTP session reused by all calls within the context.

        :return: The client instance.
        :rtype: ZohoCRMClient
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            # Rebuild a transport created by an earlier call so it picks up the session
            if self._xml is not None and self._transport is None:
                self._xml.close()
                self._xml = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Explicitly close the client and release resources.

        Safe to call multiple times.
        """
        if self._xml is not None:
            if self._transport is None:
                self._xml.close()
            self._xml = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_xml(self) -> XmlDataTransport:
        """
        Get or create the XML transport.

        :return: The lazily-initialized codec wrapping the configured transport.
        :rtype: ~zoho_crm_client.data._xml_transport.XmlDataTransport
        """
        if self._xml is None:
            transport = self._transport
            if transport is None:
                http = _HttpClient(
                    retries=self._config.http_retries,
                    backoff=self._config.http_backoff,
                    timeout=self._config.http_timeout,
                    session=self._session,
                )
                transport = HttpTransport(
                    self._config.base_url,
                    default_params=self._default_params,
                    http=http,
                )
            if self._config.enable_logging:
                transport = LoggingTransport(transport, self._logger)
            self._xml = XmlDataTransport(transport, file_sink=self._file_sink)
        return self._xml

    def call(self, module: str, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Call one Zoho CRM API operation.

        :param module: Module name, e.g. ``"Leads"``, ``"Contacts"``.
        :type module: str
        :param method: Operation name; see :mod:`zoho_crm_client.common.constants`.
        :type method: str
        :param params: Call parameters. Records to write go under ``xmlData``
            as a list of dicts.
        :type params: dict or None
        :return: Decoded result for the operation.

        :raises VendorError: If Zoho answered with an error.
        :raises NoDataError: If Zoho found no data.

        Example::

            from zoho_crm_client.core.errors import NoDataError

            try:
                leads = client.call("Leads", "getRecords", {"fromIndex": 1, "toIndex": 50})
            except NoDataError:
                leads = {}
            for no, lead in leads.items():
                print(no, lead.get("Company"))
        """
        return self._get_xml().call(module, method, params)


__all__ = ["ZohoCRMClient"]
