# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Zoho CRM client with XML request encoding and typed response decoding.
"""

from .client import ZohoCRMClient
from .core.config import ZohoCRMConfig

__version__ = "0.1.0"

__all__ = ["ZohoCRMClient", "ZohoCRMConfig", "__version__"]
