"""Domain types for records held by the remote directory and their relationships."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

DEFAULT_RELATIONSHIP_TYPE_ID = 1

type RecordId = str
type PropertyValue = str | int | float | None


class AssociationCategory(StrEnum):
    USER_DEFINED = "USER_DEFINED"
    HUBSPOT_DEFINED = "HUBSPOT_DEFINED"
    INTEGRATOR_DEFINED = "INTEGRATOR_DEFINED"


@dataclass(slots=True)
class Record:
    """A contact or zip-code object owned by the remote directory."""

    id: RecordId
    category: str
    properties: Mapping[str, PropertyValue] = field(default_factory=dict[str, PropertyValue])
    created_at: datetime | None = None
    updated_at: datetime | None = None
    archived: bool = False

    def get(self, name: str, default: PropertyValue = None) -> PropertyValue:
        return self.properties.get(name, default)


@dataclass(slots=True, frozen=True)
class RelationshipTypeDescriptor:
    type_id: int
    category: AssociationCategory = AssociationCategory.USER_DEFINED
    label: str | None = None


@dataclass(slots=True, frozen=True)
class Relationship:
    subject_id: RecordId
    object_id: RecordId
    type_id: int = DEFAULT_RELATIONSHIP_TYPE_ID
    category: AssociationCategory = AssociationCategory.USER_DEFINED


@dataclass(slots=True, frozen=True)
class RelationshipInput:
    """One entry of a batch-create request."""

    subject_id: RecordId
    object_id: RecordId
    type_id: int
    category: AssociationCategory = AssociationCategory.USER_DEFINED


@dataclass(slots=True)
class AssociationResult:
    """Outcome of a single-step association mutation."""

    succeeded: bool
    error: Exception | None = None
    skipped: bool = False


@dataclass(slots=True)
class ReconcileResult:
    """Outcome of a retire-then-create reconciliation."""

    succeeded: bool
    type_id: int | None = None
    retired: list[RecordId] = field(default_factory=list[RecordId])
    failed_retirements: dict[RecordId, Exception] = field(
        default_factory=dict[RecordId, Exception]
    )
    error: Exception | None = None
    skipped: bool = False


@dataclass(slots=True)
class BatchAssociationResult:
    succeeded: bool
    requested: int = 0
    type_id: int | None = None
    error: Exception | None = None
