# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import datetime as dt
import threading

import pytest
from lxml import etree

from zoho_crm_client.core.errors import EncodingError, NoDataError, VendorError
from zoho_crm_client.data._xml_transport import XmlDataTransport
from tests.unit.test_helpers import FakeTransport, MemorySink


def _listing(module, fields):
    cells = "".join(f'<FL val="{name}">{value}</FL>' for name, value in fields)
    return f'<response><result><{module}><row no="1">{cells}</row></{module}></result></response>'


def test_xml_data_is_encoded_before_sending(mutations_body):
    transport = FakeTransport(mutations_body)
    xml = XmlDataTransport(transport)
    params = {"xmlData": [{"Company": "Contoso"}], "duplicateCheck": 2}

    results = xml.call("Leads", "insertRecords", params)

    module, method, sent = transport.calls[0]
    assert (module, method) == ("Leads", "insertRecords")
    assert sent["duplicateCheck"] == 2
    assert sent["xmlData"] == '<Leads><row no="1"><FL val="Company">Contoso</FL></row></Leads>'
    assert set(results) == {"1", "2", "3"}


def test_caller_params_are_not_mutated(mutations_body):
    records = [{"Company": "Contoso"}]
    params = {"xmlData": records}
    XmlDataTransport(FakeTransport(mutations_body)).call("Leads", "insertRecords", params)
    assert params == {"xmlData": records}
    assert params["xmlData"] is records


def test_call_without_xml_data(records_body):
    transport = FakeTransport(records_body)
    records = XmlDataTransport(transport).call("Leads", "getRecords", {"fromIndex": 1, "toIndex": 2})
    assert transport.calls[0][2] == {"fromIndex": 1, "toIndex": 2}
    assert records["1"]["Company"] == "Contoso"


def test_call_with_no_params(records_body):
    transport = FakeTransport(records_body)
    XmlDataTransport(transport).call("Leads", "getRecords")
    assert transport.calls[0][2] == {}


def test_encoding_error_prevents_the_call():
    transport = FakeTransport()
    with pytest.raises(EncodingError):
        XmlDataTransport(transport).call("Leads", "insertRecords", {"xmlData": [{"bad": "\x01"}]})
    assert transport.calls == []


def test_transport_errors_propagate_untouched():
    failure = ConnectionError("down")
    with pytest.raises(ConnectionError) as exc:
        XmlDataTransport(FakeTransport(failure)).call("Leads", "getRecords")
    assert exc.value is failure


def test_vendor_and_no_data_errors(error_body, nodata_body):
    xml = XmlDataTransport(FakeTransport(error_body, nodata_body))
    with pytest.raises(VendorError):
        xml.call("Leads", "deleteRecords", {"id": "1"})
    with pytest.raises(NoDataError):
        xml.call("Leads", "searchRecords", {"criteria": "(Company:None)"})


def test_download_uses_original_file_path():
    sink = MemorySink()
    transport = FakeTransport(b"\x89PNG...")
    xml = XmlDataTransport(transport, file_sink=sink)

    assert xml.call("Leads", "downloadFile", {"id": "99", "file_path": "/tmp/logo.png"}) is True
    assert sink.files == {"/tmp/logo.png": b"\x89PNG..."}


def test_scalar_round_trip():
    record = {"Company": "Contoso", "Employees": 250, "Rating": 4.5, "Active": True}
    transport = FakeTransport()
    xml = XmlDataTransport(transport)

    # Echo the encoded row back as a listing
    encoded = etree.fromstring(
        _encode_via(xml, transport, record).encode("utf-8")
    )
    row = encoded.find("row")
    body = _listing("Leads", [(fl.get("val"), fl.text) for fl in row.findall("FL")])
    transport._bodies.append(body)

    decoded = xml.call("Leads", "getRecords")["1"]
    assert decoded.data == {k: ("true" if v is True else str(v)) for k, v in record.items()}


def test_nested_round_trip_two_levels():
    record = {
        "Product Details": [
            {"@type": "product", "Product Id": "42", "Quantity": "2"},
            {"@type": "product", "Product Id": "43", "Quantity": "1"},
        ]
    }
    transport = FakeTransport()
    xml = XmlDataTransport(transport)
    encoded = _encode_via(xml, transport, record, module="Quotes")

    row = etree.fromstring(encoded.encode("utf-8")).find("row")
    body = "<response><result><Quotes>{}</Quotes></result></response>".format(
        etree.tostring(row, encoding="unicode")
    )
    transport._bodies.append(body)

    decoded = xml.call("Quotes", "getRecords")["1"]
    assert decoded["Product Details"] == {
        "1": {"Product Id": "42", "Quantity": "2"},
        "2": {"Product Id": "43", "Quantity": "1"},
    }


def test_date_values_reach_the_wire_formatted(mutations_body):
    transport = FakeTransport(mutations_body)
    XmlDataTransport(transport).call(
        "Events",
        "insertRecords",
        {"xmlData": [{"Start": dt.datetime(2024, 2, 1), "End": dt.datetime(2024, 2, 1, 9, 30)}]},
    )
    sent = transport.calls[0][2]["xmlData"]
    assert '<FL val="Start">02/01/2024</FL>' in sent
    assert '<FL val="End">2024-02-01 09:30:00</FL>' in sent


def test_concurrent_calls_keep_their_own_context(records_body):
    contacts_body = _listing("Contacts", [("Last Name", "Doe")])
    gate = threading.Barrier(2)

    class SlowTransport:
        def call(self, module, method, params):
            gate.wait(timeout=5)
            return records_body if module == "Leads" else contacts_body

    xml = XmlDataTransport(SlowTransport())
    results = {}

    def run(module):
        results[module] = xml.call(module, "getRecords")

    threads = [threading.Thread(target=run, args=(m,)) for m in ("Leads", "Contacts")]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert results["Leads"]["1"]["Company"] == "Contoso"
    assert results["Contacts"]["1"]["Last Name"] == "Doe"


def test_close_closes_wrapped_transport():
    transport = FakeTransport()
    XmlDataTransport(transport).close()
    assert transport.closed


def _encode_via(xml, transport, record, module="Leads"):
    """Send ``record`` through ``xml`` and return the encoded xmlData."""
    transport._bodies.append("<response><result><row no='1'><success><code>2000</code></success></row></result></response>")
    xml.call(module, "insertRecords", {"xmlData": [record]})
    return transport.calls[-1][2]["xmlData"]
