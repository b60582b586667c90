"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .hubspot import (
    CONTACT_OBJECT_TYPE,
    HUBSPOT_BASE_URL,
    PAGE_SIZE,
    HubSpotConfig,
    get_hubspot_config,
    hubspot_headers,
)
from .logging import configure_logging
from .server import ServerConfig, get_server_config

__all__ = [
    "CONTACT_OBJECT_TYPE",
    "HUBSPOT_BASE_URL",
    "PAGE_SIZE",
    "ConfigurationError",
    "HubSpotConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ServerConfig",
    "configure_logging",
    "get_hubspot_config",
    "get_server_config",
    "hubspot_headers",
    "require_env_vars",
]
