# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://crm.zoho.com/crm/private/xml"


@dataclass(frozen=True)
class ZohoCRMConfig:
    """
    Configuration settings for Zoho CRM client operations.

    :param base_url: Root of the XML API; requests go to ``{base_url}/{module}/{method}``.
    :type base_url: str
    :param http_retries: Maximum number of attempts for HTTP requests (default: 5).
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff (default: 0.5).
    :type http_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param enable_logging: Log each transport call through :mod:`logging`.
    :type enable_logging: bool
    :param log_level: Level applied to the client logger when logging is enabled.
    :type log_level: str
    :param logger_name: Name of the client logger.
    :type logger_name: str
    """
    base_url: str = DEFAULT_BASE_URL

    # HTTP retry and timeout configuration
    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_timeout: Optional[float] = None

    # Logging configuration
    enable_logging: bool = False
    log_level: str = "WARNING"
    logger_name: str = "zoho_crm_client"

    @classmethod
    def from_env(cls) -> "ZohoCRMConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~zoho_crm_client.core.config.ZohoCRMConfig
        """
        # Environment-free defaults
        return cls(
            base_url=DEFAULT_BASE_URL,
            http_retries=None,  # Will default to 5 in _HttpClient
            http_backoff=None,  # Will default to 0.5 in _HttpClient
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
        )
