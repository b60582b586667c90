"""Zip-code and contact record services."""

from __future__ import annotations

import asyncio
import math
import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from groundtruth.domain.model import BatchAssociationResult
from groundtruth.domain.ports.directory import DirectoryError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from groundtruth.domain.associations import BatchAssociator
    from groundtruth.domain.model import PropertyValue, Record
    from groundtruth.domain.ports.directory import DirectoryClient

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
ZIP_CODE_PROPERTIES = ("name", "homeownership_rate", "median_home_age")
CONTACT_SUMMARY_PROPERTIES = ("firstname", "lastname")
CONTACT_LIST_PROPERTIES = ("firstname", "lastname", "email")

_ZIP_CODE_PATTERN = re.compile(r"^\d{5}$")


class ZipCodeValidationError(ValueError):
    """Raised when a submitted zip code form is rejected before reaching the directory."""


def _parse_float(value: object) -> float:
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0.0
    # inf and nan are not amounts
    return number if math.isfinite(number) else 0.0


def _parse_int(value: object) -> int:
    return int(_parse_float(value))


@dataclass(slots=True, frozen=True)
class ZipCodeForm:
    name: str
    homeownership_rate: float
    median_home_age: int

    @classmethod
    def from_submission(
        cls,
        *,
        name: str | None,
        homeownership_rate: object = None,
        median_home_age: object = None,
    ) -> ZipCodeForm:
        """Coerce raw form fields; unparseable numbers become zero."""

        zip_code = (name or "").strip()
        if not _ZIP_CODE_PATTERN.match(zip_code):
            raise ZipCodeValidationError("Zip code must be exactly 5 digits (e.g., 84101).")
        rate = _parse_float(homeownership_rate) if homeownership_rate is not None else 0.0
        if not 0.0 <= rate <= 100.0:
            raise ZipCodeValidationError("Homeownership rate must be between 0 and 100.")
        age = _parse_int(median_home_age) if median_home_age is not None else 0
        if age < 0:
            raise ZipCodeValidationError("Median home age cannot be negative.")
        return cls(name=zip_code, homeownership_rate=rate, median_home_age=age)

    def to_properties(self) -> dict[str, PropertyValue]:
        return {
            "name": self.name,
            "homeownership_rate": self.homeownership_rate,
            "median_home_age": self.median_home_age,
        }


@dataclass(slots=True)
class ZipCodeListing:
    record: Record
    contact: Record | None = None

    @property
    def name(self) -> str:
        value = self.record.get("name")
        return "" if value is None else str(value)


@dataclass(slots=True)
class CreateZipCodeResult:
    record: Record
    associations: BatchAssociationResult


async def list_zip_codes(
    directory: DirectoryClient,
    *,
    object_type: str,
    contact_type: str,
    limit: int = DEFAULT_PAGE_SIZE,
) -> list[ZipCodeListing]:
    """Return zip-code records with their first associated contact, sorted by zip code."""

    records = await directory.list_records(
        object_type, properties=ZIP_CODE_PROPERTIES, limit=limit
    )
    listings = await asyncio.gather(
        *(
            _with_contact(directory, record, object_type=object_type, contact_type=contact_type)
            for record in records
        )
    )
    return sorted(listings, key=lambda listing: listing.name)


async def _with_contact(
    directory: DirectoryClient,
    record: Record,
    *,
    object_type: str,
    contact_type: str,
) -> ZipCodeListing:
    try:
        relationships = await directory.list_relationships(record.id, object_type, contact_type)
        if not relationships:
            return ZipCodeListing(record=record)
        contact = await directory.get_record(
            contact_type,
            relationships[0].object_id,
            properties=CONTACT_SUMMARY_PROPERTIES,
        )
    except DirectoryError as exc:
        log.warning("Could not load contact for %s %s: %s", object_type, record.id, exc)
        return ZipCodeListing(record=record)
    return ZipCodeListing(record=record, contact=contact)


async def list_contacts(
    directory: DirectoryClient,
    *,
    contact_type: str,
    limit: int = DEFAULT_PAGE_SIZE,
) -> list[Record]:
    return await directory.list_records(
        contact_type, properties=CONTACT_LIST_PROPERTIES, limit=limit
    )


async def create_zip_code(
    directory: DirectoryClient,
    *,
    object_type: str,
    form: ZipCodeForm,
    contact_ids: Iterable[str] = (),
    associator: BatchAssociator,
) -> CreateZipCodeResult:
    """Create a zip-code record, then link it to the given contacts.

    A failure to create the record propagates. A failure to link contacts is only
    reported on the result; the record stays created.
    """

    record = await directory.create_record(object_type, form.to_properties())
    log.info("Created %s %s for zip code %s", object_type, record.id, form.name)
    associations = await associator.associate_many(record.id, object_type, contact_ids)
    return CreateZipCodeResult(record=record, associations=associations)
