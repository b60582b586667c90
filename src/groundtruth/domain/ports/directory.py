"""Port for the remote record and relationship directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from groundtruth.domain.model import (
        AssociationCategory,
        PropertyValue,
        Record,
        Relationship,
        RelationshipInput,
        RelationshipTypeDescriptor,
    )


class DirectoryError(RuntimeError):
    """Raised by directory adapters for any failed remote call."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class DirectoryClient(Protocol):
    """Authenticated read/create/delete access to records and relationships.

    Every method raises :class:`DirectoryError` when the remote call fails.
    """

    async def get_relationship_types(
        self, subject_category: str, object_category: str
    ) -> list[RelationshipTypeDescriptor]: ...

    async def list_relationships(
        self, subject_id: str, subject_category: str, object_category: str
    ) -> list[Relationship]: ...

    async def delete_relationship(
        self, subject_id: str, subject_category: str, object_category: str, target_id: str
    ) -> None: ...

    async def put_relationship(
        self,
        subject_id: str,
        subject_category: str,
        object_category: str,
        target_id: str,
        *,
        type_id: int,
        category: AssociationCategory,
    ) -> None: ...

    async def batch_create_relationships(
        self,
        subject_category: str,
        object_category: str,
        entries: Sequence[RelationshipInput],
    ) -> None: ...

    async def list_records(
        self, category: str, *, properties: Sequence[str], limit: int
    ) -> list[Record]: ...

    async def get_record(
        self, category: str, record_id: str, *, properties: Sequence[str]
    ) -> Record: ...

    async def create_record(
        self, category: str, properties: Mapping[str, PropertyValue]
    ) -> Record: ...

    async def aclose(self) -> None: ...


__all__ = ["DirectoryClient", "DirectoryError"]
