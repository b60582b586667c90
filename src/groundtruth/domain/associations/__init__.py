"""Keep contact to zip-code relationships consistent in the remote directory."""

from __future__ import annotations

from .batch import BatchAssociator
from .reconciler import AssociationReconciler
from .resolver import RelationshipTypeResolver

__all__ = [
    "AssociationReconciler",
    "BatchAssociator",
    "RelationshipTypeResolver",
]
