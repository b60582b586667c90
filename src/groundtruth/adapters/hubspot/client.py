"""HTTP client for the HubSpot CRM API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from groundtruth.adapters.http_resilience import ResilientClient
from groundtruth.domain.ports.directory import DirectoryError

from .schema import (
    AssociationLabels,
    AssociationPage,
    BatchResponse,
    ErrorResponse,
    ObjectPage,
    ObjectPayload,
)
from .translator import (
    association_spec,
    build_batch_request,
    translate_association,
    translate_record,
    translate_type,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from types import TracebackType

    from pydantic import BaseModel

    from groundtruth.config.http_resilience import ResilienceConfig
    from groundtruth.config.hubspot import HubSpotConfig
    from groundtruth.domain.model import (
        AssociationCategory,
        PropertyValue,
        Record,
        Relationship,
        RelationshipInput,
        RelationshipTypeDescriptor,
    )

log = getLogger(__name__)


class HubSpotAPIError(DirectoryError):
    """Raised when a HubSpot call fails or returns an unusable payload."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        category: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.category = category


class HubSpotClient:
    """Async HubSpot client implementing the directory port.

    One instance owns one pooled HTTP client; close it with ``aclose`` or use it as
    an async context manager.
    """

    def __init__(
        self,
        *,
        config: HubSpotConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        factory = client_factory or ResilientClient
        self._http = factory(config.resilience)

    async def __aenter__(self) -> HubSpotClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # relationship schema and associations (v4)

    async def get_relationship_types(
        self, subject_category: str, object_category: str
    ) -> list[RelationshipTypeDescriptor]:
        response = await self._send(
            "GET", f"/crm/v4/associations/{subject_category}/{object_category}/labels"
        )
        labels = _parse(AssociationLabels, response)
        return [translate_type(label) for label in labels.results]

    async def list_relationships(
        self, subject_id: str, subject_category: str, object_category: str
    ) -> list[Relationship]:
        response = await self._send(
            "GET",
            f"/crm/v4/objects/{subject_category}/{subject_id}/associations/{object_category}",
            params={"limit": self._config.page_size},
        )
        page = _parse(AssociationPage, response)
        return [translate_association(target, subject_id=subject_id) for target in page.results]

    async def delete_relationship(
        self, subject_id: str, subject_category: str, object_category: str, target_id: str
    ) -> None:
        await self._send(
            "DELETE",
            f"/crm/v4/objects/{subject_category}/{subject_id}"
            f"/associations/{object_category}/{target_id}",
        )

    async def put_relationship(
        self,
        subject_id: str,
        subject_category: str,
        object_category: str,
        target_id: str,
        *,
        type_id: int,
        category: AssociationCategory,
    ) -> None:
        spec = association_spec(type_id, category)
        await self._send(
            "PUT",
            f"/crm/v4/objects/{subject_category}/{subject_id}"
            f"/associations/{object_category}/{target_id}",
            json=[spec.model_dump(by_alias=True)],
        )

    async def batch_create_relationships(
        self,
        subject_category: str,
        object_category: str,
        entries: Sequence[RelationshipInput],
    ) -> None:
        request = build_batch_request(entries)
        response = await self._send(
            "POST",
            f"/crm/v4/associations/{subject_category}/{object_category}/batch/create",
            json=request.model_dump(by_alias=True),
        )
        if response.status_code != httpx.codes.MULTI_STATUS:
            return
        result = _parse(BatchResponse, response)
        if result.errors:
            messages = "; ".join(error.message for error in result.errors)
            raise HubSpotAPIError(
                f"Batch association partially failed ({len(result.errors)} errors): {messages}",
                status_code=response.status_code,
            )

    # records (v3)

    async def list_records(
        self, category: str, *, properties: Sequence[str], limit: int
    ) -> list[Record]:
        response = await self._send(
            "GET",
            f"/crm/v3/objects/{category}",
            params={"properties": ",".join(properties), "limit": limit},
        )
        page = _parse(ObjectPage, response)
        return [translate_record(payload, category=category) for payload in page.results]

    async def get_record(
        self, category: str, record_id: str, *, properties: Sequence[str]
    ) -> Record:
        response = await self._send(
            "GET",
            f"/crm/v3/objects/{category}/{record_id}",
            params={"properties": ",".join(properties)},
        )
        return translate_record(_parse(ObjectPayload, response), category=category)

    async def create_record(
        self, category: str, properties: Mapping[str, PropertyValue]
    ) -> Record:
        response = await self._send(
            "POST",
            f"/crm/v3/objects/{category}",
            json={"properties": dict(properties)},
        )
        return translate_record(_parse(ObjectPayload, response), category=category)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str | int] | None = None,
        json: object = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            log.error(f"HubSpot {method} {path} failed: {exc}")
            raise HubSpotAPIError(f"HubSpot {method} {path} failed: {exc}") from exc

        if response.is_error:
            raise _api_error(method, path, response)
        return response


def _parse[ModelT: BaseModel](model: type[ModelT], response: httpx.Response) -> ModelT:
    try:
        return model.model_validate(response.json())
    except ValueError as exc:
        raise HubSpotAPIError(
            f"Unexpected HubSpot response payload from {response.request.url.path}",
            status_code=response.status_code,
        ) from exc


def _error_payload(response: httpx.Response) -> ErrorResponse | None:
    try:
        return ErrorResponse.model_validate(response.json())
    except ValueError:
        return None


def _api_error(method: str, path: str, response: httpx.Response) -> HubSpotAPIError:
    payload = _error_payload(response)
    message = payload.message if payload is not None else response.reason_phrase or "error"
    category = payload.category if payload is not None else None
    log.error(f"HubSpot API error {response.status_code} on {method} {path}: {message}")
    return HubSpotAPIError(message, status_code=response.status_code, category=category)
