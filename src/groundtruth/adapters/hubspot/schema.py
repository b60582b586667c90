"""Pydantic models describing the HubSpot CRM v3/v4 payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

type PropertyValue = str | int | float | None


class HubSpotBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectPayload(HubSpotBaseModel):
    id: str
    properties: dict[str, PropertyValue] = Field(default_factory=dict[str, PropertyValue])
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    archived: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value


class PagingNext(HubSpotBaseModel):
    after: str
    link: str | None = None


class Paging(HubSpotBaseModel):
    next: PagingNext | None = None


class ObjectPage(HubSpotBaseModel):
    results: list[ObjectPayload] = Field(default_factory=list[ObjectPayload])
    paging: Paging | None = None


class AssociationType(HubSpotBaseModel):
    category: str
    type_id: int = Field(alias="typeId")
    label: str | None = None


class AssociationTarget(HubSpotBaseModel):
    to_object_id: str = Field(alias="toObjectId")
    association_types: list[AssociationType] = Field(
        default_factory=list[AssociationType], alias="associationTypes"
    )

    @field_validator("to_object_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value


class AssociationPage(HubSpotBaseModel):
    results: list[AssociationTarget] = Field(default_factory=list[AssociationTarget])
    paging: Paging | None = None


class AssociationLabels(HubSpotBaseModel):
    results: list[AssociationType] = Field(default_factory=list[AssociationType])


class AssociationSpec(HubSpotBaseModel):
    association_category: str = Field(alias="associationCategory")
    association_type_id: int = Field(alias="associationTypeId")


class ObjectRef(HubSpotBaseModel):
    id: str


class BatchAssociationInput(HubSpotBaseModel):
    types: list[AssociationSpec]
    from_: ObjectRef = Field(alias="from")
    to: ObjectRef


class BatchAssociationRequest(HubSpotBaseModel):
    inputs: list[BatchAssociationInput]


class BatchError(HubSpotBaseModel):
    status: str | None = None
    category: str | None = None
    message: str = ""


class BatchResponse(HubSpotBaseModel):
    status: str | None = None
    errors: list[BatchError] = Field(default_factory=list[BatchError])
    num_errors: int | None = Field(default=None, alias="numErrors")


class ErrorResponse(HubSpotBaseModel):
    status: str | None = None
    message: str
    category: str | None = None
    correlation_id: str | None = Field(default=None, alias="correlationId")
