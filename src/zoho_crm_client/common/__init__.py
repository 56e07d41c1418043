# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Shared constants for the Zoho CRM client."""

__all__ = []
