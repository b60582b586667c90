"""HubSpot CRM configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

HUBSPOT_BASE_URL = "https://api.hubapi.com"
HUBSPOT_TIMEOUT_SECONDS = 10.0
CONTACT_OBJECT_TYPE = "contacts"
PAGE_SIZE = 100


@dataclass(frozen=True)
class HubSpotConfig:
    """Holds HubSpot private-app credentials and the zip-code object type."""

    access_token: str
    custom_object_type: str
    resilience: ResilienceConfig
    contact_object_type: str = CONTACT_OBJECT_TYPE
    page_size: int = PAGE_SIZE


def hubspot_headers(access_token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {access_token}",
        "Content-Type": "application/json",
    }


def get_hubspot_config(*, resilience: ResilienceConfig | None = None) -> HubSpotConfig:
    values = require_env_vars(("ACCESS_TOKEN", "CUSTOM_OBJECT_TYPE"))
    access_token = values["ACCESS_TOKEN"]
    base_url = os.getenv("HUBSPOT_BASE_URL") or HUBSPOT_BASE_URL
    return HubSpotConfig(
        access_token=access_token,
        custom_object_type=values["CUSTOM_OBJECT_TYPE"],
        resilience=resilience
        or ResilienceConfig(
            name="hubspot",
            base_url=base_url,
            timeout_seconds=HUBSPOT_TIMEOUT_SECONDS,
            retry=RetryPolicy(),
            # Private apps are allowed 100 requests per 10 seconds.
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers=hubspot_headers(access_token),
        ),
    )
