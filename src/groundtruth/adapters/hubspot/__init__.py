"""Public interface for the HubSpot adapter."""

from __future__ import annotations

from .client import HubSpotAPIError, HubSpotClient
from .translator import build_batch_request, translate_association, translate_record

__all__ = [
    "HubSpotAPIError",
    "HubSpotClient",
    "build_batch_request",
    "translate_association",
    "translate_record",
]
