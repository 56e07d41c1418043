# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import logging
import unittest
from unittest.mock import patch

from zoho_crm_client import ZohoCRMClient, ZohoCRMConfig
from zoho_crm_client.core.errors import NoDataError
from zoho_crm_client.data._transport import HttpTransport, LoggingTransport
from zoho_crm_client.data._xml_transport import XmlDataTransport
from tests.unit.test_helpers import FakeTransport, MemorySink

RECORDS = b"""<response><result><Leads><row no="1"><FL val="Company">Contoso</FL></row></Leads></result></response>"""
NODATA = b"""<response><nodata><code>4422</code><message>There is no data to show</message></nodata></response>"""


class TestZohoCRMClient(unittest.TestCase):
    """Unit tests for ZohoCRMClient wiring."""

    def test_call_goes_through_xml_codec(self):
        transport = FakeTransport(RECORDS)
        client = ZohoCRMClient(transport=transport)

        records = client.call("Leads", "getRecords", {"fromIndex": 1})

        self.assertEqual(records["1"]["Company"], "Contoso")
        self.assertEqual(transport.calls, [("Leads", "getRecords", {"fromIndex": 1})])

    def test_no_data_propagates(self):
        client = ZohoCRMClient(transport=FakeTransport(NODATA))
        with self.assertRaises(NoDataError):
            client.call("Leads", "searchRecords", {"criteria": "(Company:x)"})

    def test_xml_transport_is_created_lazily_once(self):
        client = ZohoCRMClient(transport=FakeTransport(RECORDS, RECORDS))
        self.assertIsNone(client._xml)
        client.call("Leads", "getRecords")
        xml = client._xml
        self.assertIsInstance(xml, XmlDataTransport)
        client.call("Leads", "getRecords")
        self.assertIs(client._xml, xml)

    def test_default_transport_is_http(self):
        config = ZohoCRMConfig(base_url="https://crm.example.com/xml", http_retries=2, http_timeout=9)
        client = ZohoCRMClient(config, default_params={"authtoken": "tok"})

        xml = client._get_xml()

        http_transport = xml._transport
        self.assertIsInstance(http_transport, HttpTransport)
        self.assertEqual(http_transport._base_url, "https://crm.example.com/xml")
        self.assertEqual(http_transport._default_params, {"authtoken": "tok"})
        self.assertEqual(http_transport._http.max_attempts, 2)
        self.assertEqual(http_transport._http.default_timeout, 9)

    def test_logging_wraps_transport_when_enabled(self):
        config = ZohoCRMConfig(enable_logging=True, log_level="debug", logger_name="zoho_crm_client.tests")
        client = ZohoCRMClient(config, transport=FakeTransport(RECORDS))

        xml = client._get_xml()

        self.assertIsInstance(xml._transport, LoggingTransport)
        self.assertEqual(logging.getLogger("zoho_crm_client.tests").level, logging.DEBUG)
        with self.assertLogs("zoho_crm_client.tests", level="DEBUG") as logs:
            client.call("Leads", "getRecords")
        self.assertTrue(any("Leads/getRecords" in line for line in logs.output))

    def test_file_sink_is_forwarded(self):
        sink = MemorySink()
        client = ZohoCRMClient(transport=FakeTransport(b"bytes"), file_sink=sink)
        self.assertTrue(client.call("Leads", "downloadFile", {"id": "1", "file_path": "a.bin"}))
        self.assertEqual(sink.files, {"a.bin": b"bytes"})

    def test_close_does_not_close_injected_transport(self):
        transport = FakeTransport(RECORDS)
        client = ZohoCRMClient(transport=transport)
        client.call("Leads", "getRecords")
        client.close()
        self.assertFalse(transport.closed)
        self.assertIsNone(client._xml)

    def test_close_closes_default_transport(self):
        client = ZohoCRMClient()
        xml = client._get_xml()
        with patch.object(xml, "close") as mock_close:
            client.close()
        mock_close.assert_called_once()
        client.close()  # idempotent
