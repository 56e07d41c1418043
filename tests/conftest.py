# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Zoho CRM client tests.

This module provides common test fixtures, fake transports, and sample
response bodies that can be used across all test modules.
"""

import pytest

from zoho_crm_client.core.config import ZohoCRMConfig
from tests.unit.test_helpers import MemorySink


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return ZohoCRMConfig(
        base_url="https://crm.example.com/crm/private/xml",
        http_retries=1,
        http_backoff=0.1,
        http_timeout=5,
    )


@pytest.fixture
def memory_sink():
    return MemorySink()


@pytest.fixture
def records_body():
    return b"""<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/getRecords">
    <result>
        <Leads>
            <row no="1">
                <FL val="LEADID"><![CDATA[1000000017001]]></FL>
                <FL val="Company"><![CDATA[Contoso]]></FL>
            </row>
            <row no="2">
                <FL val="LEADID"><![CDATA[1000000017002]]></FL>
                <FL val="Company"><![CDATA[Fabrikam]]></FL>
            </row>
        </Leads>
    </result>
</response>"""


@pytest.fixture
def mutations_body():
    return b"""<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/insertRecords">
    <result>
        <row no="1">
            <success>
                <code>2000</code>
                <details>
                    <FL val="Id">1000000017001</FL>
                    <FL val="Created Time">2024-05-02 10:15:00</FL>
                    <FL val="Modified Time">2024-05-02 10:15:00</FL>
                    <FL val="Created By"><![CDATA[Jane Doe]]></FL>
                    <FL val="Modified By"><![CDATA[Jane Doe]]></FL>
                    <FL val="Record Owner"><![CDATA[Jane Doe]]></FL>
                </details>
            </success>
        </row>
        <row no="2">
            <success>
                <code>2001</code>
                <details>
                    <FL val="Id">1000000017002</FL>
                </details>
            </success>
        </row>
        <row no="3">
            <error>
                <code>4835</code>
                <details>Unable to process your request. Mandatory field Last Name is missing.</details>
            </error>
        </row>
    </result>
</response>"""


@pytest.fixture
def error_body():
    return b"""<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/getRecords">
    <error>
        <code>4834</code>
        <message>Invalid Ticket Id</message>
    </error>
</response>"""


@pytest.fixture
def nodata_body():
    return b"""<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/searchRecords">
    <nodata>
        <code>4422</code>
        <message>There is no data to show</message>
    </nodata>
</response>"""
