# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the Zoho CRM XML API.

Operation names, reserved parameter keys and wire-format tag names used when
encoding requests and decoding responses.
"""

# Remote operations
GET_RECORDS = "getRecords"
GET_RECORD_BY_ID = "getRecordById"
GET_MY_RECORDS = "getMyRecords"
SEARCH_RECORDS = "searchRecords"
GET_SEARCH_RECORDS_BY_PDC = "getSearchRecordsByPDC"
GET_RELATED_RECORDS = "getRelatedRecords"
GET_FIELDS = "getFields"
INSERT_RECORDS = "insertRecords"
UPDATE_RECORDS = "updateRecords"
DELETE_RECORDS = "deleteRecords"
GET_DELETED_RECORD_IDS = "getDeletedRecordIds"
UPLOAD_FILE = "uploadFile"
DOWNLOAD_FILE = "downloadFile"
DELETE_FILE = "deleteFile"

# Request parameter keys
PARAM_XML_DATA = "xmlData"
"""Reserved key holding the list of records to encode as XML."""

PARAM_FILE_PATH = "file_path"
"""Destination path for ``downloadFile`` responses."""

PARAM_CONTENT = "content"
"""Binary stream sent as a multipart upload for ``uploadFile``."""

# Wire format
TAG_ROW = "row"
TAG_FIELD = "FL"
ATTR_ROW_NUMBER = "no"
ATTR_FIELD_NAME = "val"

NESTED_TYPE_KEY = "@type"
"""Key inside a nested entry naming the tag of its sub-node."""

DEFAULT_NESTED_TAG = "null"

DATE_FORMAT = "%m/%d/%Y"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

UPLOAD_SUCCESS_CODE = "4800"
DEFAULT_RESULT_CODE = "0"
