from __future__ import annotations

import pytest

from groundtruth.config import HubSpotConfig, ResilienceConfig, hubspot_headers
from tests.support.directory import FakeDirectory

ZIP_TYPE = "2-12345"


@pytest.fixture
def hubspot_config() -> HubSpotConfig:
    return HubSpotConfig(
        access_token="test-token",
        custom_object_type=ZIP_TYPE,
        resilience=ResilienceConfig(
            name="hubspot-test",
            base_url="https://api.hubapi.test",
            retry=None,
            default_headers=hubspot_headers("test-token"),
        ),
    )


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory()
