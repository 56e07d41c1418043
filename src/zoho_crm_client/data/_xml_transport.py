# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
XML codec layered over a transport.

:class:`XmlDataTransport` encodes the ``xmlData`` records of a call, hands
the call to the wrapped transport, and decodes the response body into typed
results. It keeps no per-call state on the instance, so one instance can
serve concurrent calls as long as the wrapped transport can.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..common.constants import PARAM_XML_DATA
from ._decoding import FileSink, _CallContext, decode_response, open_file_sink
from ._encoding import encode_records
from ._transport import Transport


class XmlDataTransport:
    """
    Transport decorator translating records to and from Zoho CRM XML.

    :param transport: Transport performing the round trip.
    :type transport: ~zoho_crm_client.data._transport.Transport
    :param file_sink: Opens the destination of ``downloadFile`` bodies for
        binary writing. Defaults to the local filesystem.
    :type file_sink: Callable[[str], ContextManager[BinaryIO]] | None

    Example::

        xml = XmlDataTransport(HttpTransport(default_params={"authtoken": token, "scope": "crmapi"}))
        results = xml.call("Leads", "insertRecords", {"xmlData": [{"Company": "Contoso", "Last Name": "Doe"}]})
        print(results["1"].id)
    """

    def __init__(self, transport: Transport, *, file_sink: Optional[FileSink] = None) -> None:
        self._transport = transport
        self._file_sink = file_sink or open_file_sink

    def call(self, module: str, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Perform one API call.

        :param module: Module name, e.g. ``"Leads"``.
        :type module: str
        :param method: Operation name, e.g. ``"getRecords"``.
        :type method: str
        :param params: Call parameters. The ``xmlData`` entry, when present, is
            a list of records encoded to XML before sending. The mapping
            itself is not modified.
        :type params: Mapping[str, Any] | None
        :return: Decoded result; see :mod:`zoho_crm_client.data._decoding`.
        :raises EncodingError: If ``xmlData`` cannot be encoded.
        :raises VendorError: If Zoho answered with an error.
        :raises NoDataError: If Zoho answered that there is no data.
        :raises MalformedResponseError: If the response cannot be decoded.
        :raises ConfigurationError: If ``downloadFile`` has no ``file_path``.
        """
        original = dict(params or {})
        context = _CallContext(module, method, MappingProxyType(original))

        wire_params = dict(original)
        if PARAM_XML_DATA in wire_params:
            wire_params[PARAM_XML_DATA] = encode_records(module, wire_params[PARAM_XML_DATA])

        body = self._transport.call(module, method, wire_params)
        return decode_response(body, context, self._file_sink)

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()


__all__ = ["XmlDataTransport"]
