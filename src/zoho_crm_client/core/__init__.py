# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Zoho CRM client.

This module contains the foundational components including configuration,
HTTP client, and error handling.
"""

__all__ = []
