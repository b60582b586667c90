"""Translate HubSpot payloads to and from domain types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from groundtruth.domain.model import (
    AssociationCategory,
    Record,
    Relationship,
    RelationshipTypeDescriptor,
)

from .schema import AssociationSpec, BatchAssociationInput, BatchAssociationRequest, ObjectRef

if TYPE_CHECKING:
    from collections.abc import Sequence

    from groundtruth.domain.model import RelationshipInput

    from .schema import AssociationTarget, AssociationType, ObjectPayload


def _category(value: str) -> AssociationCategory:
    try:
        return AssociationCategory(value)
    except ValueError:
        return AssociationCategory.USER_DEFINED


def translate_record(payload: ObjectPayload, *, category: str) -> Record:
    return Record(
        id=payload.id,
        category=category,
        properties=dict(payload.properties),
        created_at=payload.created_at,
        updated_at=payload.updated_at,
        archived=payload.archived,
    )


def translate_type(payload: AssociationType) -> RelationshipTypeDescriptor:
    return RelationshipTypeDescriptor(
        type_id=payload.type_id,
        category=_category(payload.category),
        label=payload.label,
    )


def translate_association(payload: AssociationTarget, *, subject_id: str) -> Relationship:
    if not payload.association_types:
        return Relationship(subject_id=subject_id, object_id=payload.to_object_id)
    first = payload.association_types[0]
    return Relationship(
        subject_id=subject_id,
        object_id=payload.to_object_id,
        type_id=first.type_id,
        category=_category(first.category),
    )


def association_spec(type_id: int, category: AssociationCategory) -> AssociationSpec:
    return AssociationSpec(association_category=str(category), association_type_id=type_id)


def build_batch_request(entries: Sequence[RelationshipInput]) -> BatchAssociationRequest:
    return BatchAssociationRequest(
        inputs=[
            BatchAssociationInput(
                types=[association_spec(entry.type_id, entry.category)],
                from_=ObjectRef(id=entry.subject_id),
                to=ObjectRef(id=entry.object_id),
            )
            for entry in entries
        ]
    )
