# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Wire-level components: XML encoding, response decoding, and transports.
"""

__all__ = []
