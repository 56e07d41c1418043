# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# Encoding subcodes
ENCODING_INVALID_TAG = "encoding_invalid_tag"
ENCODING_INVALID_TEXT = "encoding_invalid_text"

# Response subcodes
RESPONSE_NOT_WELL_FORMED = "response_not_well_formed"
RESPONSE_UNEXPECTED_SHAPE = "response_unexpected_shape"

# Configuration subcodes
CONFIG_FILE_PATH_MISSING = "config_file_path_missing"


def _http_subcode(status: int) -> str:
    return f"http_{status}"
