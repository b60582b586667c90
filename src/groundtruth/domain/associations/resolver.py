"""Relationship type lookup against the remote schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from groundtruth.domain.model import DEFAULT_RELATIONSHIP_TYPE_ID
from groundtruth.domain.ports.directory import DirectoryError

if TYPE_CHECKING:
    from groundtruth.domain.ports.directory import DirectoryClient

log = getLogger(__name__)


@dataclass(slots=True)
class RelationshipTypeResolver:
    """Resolve the relationship type id governing an edge between two categories.

    Lookups are memoised on the instance, so a resolver should live no longer than
    the request that created it.
    """

    directory: DirectoryClient
    default_type_id: int = DEFAULT_RELATIONSHIP_TYPE_ID
    _resolved: dict[tuple[str, str], int] = field(
        default_factory=dict[tuple[str, str], int], init=False, repr=False
    )

    async def resolve_type_id(self, subject_category: str, object_category: str) -> int:
        key = (subject_category, object_category)
        cached = self._resolved.get(key)
        if cached is not None:
            return cached
        type_id = await self._lookup(subject_category, object_category)
        self._resolved[key] = type_id
        return type_id

    async def _lookup(self, subject_category: str, object_category: str) -> int:
        try:
            descriptors = await self.directory.get_relationship_types(
                subject_category, object_category
            )
        except DirectoryError as exc:
            log.warning(
                "Relationship type lookup %s -> %s failed, using default %s: %s",
                subject_category,
                object_category,
                self.default_type_id,
                exc,
            )
            return self.default_type_id

        if not descriptors:
            log.warning(
                "No relationship types registered for %s -> %s, using default %s",
                subject_category,
                object_category,
                self.default_type_id,
            )
            return self.default_type_id

        # TODO pick by label or category once the schema author confirms which
        # edge is intended; list order is not a guarantee.
        return descriptors[0].type_id
