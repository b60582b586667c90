"""Zip code and contact endpoints.

Listing endpoints return JSON payloads shaped for the page templates; form posts
answer with redirects back to the listing, carrying an ``error`` query parameter
when an association change failed.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from groundtruth.config import HubSpotConfig
from groundtruth.domain.associations import AssociationReconciler, BatchAssociator
from groundtruth.domain.model import PropertyValue, Record
from groundtruth.domain.ports.directory import DirectoryClient, DirectoryError
from groundtruth.domain.records import (
    ZipCodeForm,
    ZipCodeListing,
    ZipCodeValidationError,
    create_zip_code,
    list_contacts,
    list_zip_codes,
)

from .dependencies import get_batch_associator, get_config, get_directory, get_reconciler

router = APIRouter()
logger = logging.getLogger(__name__)

HOME_TITLE = "Ground Truth | Housing Data"
CONTACTS_TITLE = "Contacts | Ground Truth"
UPDATE_TITLE = "Add Zip Code | Ground Truth"


class RecordResponse(BaseModel):
    id: str
    properties: dict[str, PropertyValue]

    @classmethod
    def from_record(cls, record: Record) -> RecordResponse:
        return cls(id=record.id, properties=dict(record.properties))


class ZipCodeResponse(RecordResponse):
    contact: RecordResponse | None = None

    @classmethod
    def from_listing(cls, listing: ZipCodeListing) -> ZipCodeResponse:
        contact = RecordResponse.from_record(listing.contact) if listing.contact else None
        return cls(
            id=listing.record.id,
            properties=dict(listing.record.properties),
            contact=contact,
        )


class HomeResponse(BaseModel):
    title: str = HOME_TITLE
    records: list[ZipCodeResponse]
    error: str | None = None


class ContactsResponse(BaseModel):
    title: str = CONTACTS_TITLE
    contacts: list[RecordResponse]
    error: str | None = None


class UpdateFormResponse(BaseModel):
    title: str = UPDATE_TITLE
    error: str | None = None
    form_data: dict[str, str] | None = None


def _redirect_home(error: str | None = None) -> RedirectResponse:
    url = "/" if error is None else f"/?error={error}"
    return RedirectResponse(url=url, status_code=303)


@router.get("/", response_model=HomeResponse, tags=["zip-codes"])
async def home(
    directory: DirectoryClient = Depends(get_directory),
    config: HubSpotConfig = Depends(get_config),
):
    """List zip-code records with their associated contact."""
    try:
        listings = await list_zip_codes(
            directory,
            object_type=config.custom_object_type,
            contact_type=config.contact_object_type,
            limit=config.page_size,
        )
    except DirectoryError as exc:
        logger.error(f"Error fetching records: {exc}")
        return HomeResponse(
            records=[],
            error="Failed to load data. Check your ACCESS_TOKEN and CUSTOM_OBJECT_TYPE.",
        )
    return HomeResponse(records=[ZipCodeResponse.from_listing(listing) for listing in listings])


@router.get("/contacts", response_model=ContactsResponse, tags=["contacts"])
async def contacts(
    directory: DirectoryClient = Depends(get_directory),
    config: HubSpotConfig = Depends(get_config),
):
    try:
        records = await list_contacts(
            directory, contact_type=config.contact_object_type, limit=config.page_size
        )
    except DirectoryError as exc:
        logger.error(f"Error fetching contacts: {exc}")
        return ContactsResponse(contacts=[], error="Failed to load contacts.")
    return ContactsResponse(contacts=[RecordResponse.from_record(record) for record in records])


@router.get("/update-cobj", response_model=UpdateFormResponse, tags=["zip-codes"])
async def update_form():
    return UpdateFormResponse()


@router.post("/update-cobj", tags=["zip-codes"])
async def create_record(
    name: str = Form(""),
    homeownership_rate: str = Form(""),
    median_home_age: str = Form(""),
    contact_ids: list[str] = Form(default=[]),
    directory: DirectoryClient = Depends(get_directory),
    config: HubSpotConfig = Depends(get_config),
    associator: BatchAssociator = Depends(get_batch_associator),
):
    """Create a zip-code record and link it to the selected contacts."""
    form_data = {
        "name": name,
        "homeownership_rate": homeownership_rate,
        "median_home_age": median_home_age,
    }
    try:
        form = ZipCodeForm.from_submission(
            name=name,
            homeownership_rate=homeownership_rate,
            median_home_age=median_home_age,
        )
    except ZipCodeValidationError as exc:
        body = UpdateFormResponse(error=str(exc), form_data=form_data)
        return JSONResponse(status_code=422, content=body.model_dump())

    try:
        result = await create_zip_code(
            directory,
            object_type=config.custom_object_type,
            form=form,
            contact_ids=contact_ids,
            associator=associator,
        )
    except DirectoryError as exc:
        logger.error(f"Error creating record: {exc}")
        body = UpdateFormResponse(
            error="Failed to create record. Check your data and try again.",
            form_data=form_data,
        )
        return JSONResponse(status_code=502, content=body.model_dump())

    if not result.associations.succeeded:
        return _redirect_home("associate")
    return _redirect_home()


@router.post("/associate", tags=["associations"])
async def associate(
    contact_id: str = Form(...),
    zip_code_id: str = Form(""),
    config: HubSpotConfig = Depends(get_config),
    reconciler: AssociationReconciler = Depends(get_reconciler),
):
    """Point a contact at one zip code, replacing any previous association."""
    result = await reconciler.reconcile(contact_id, config.custom_object_type, zip_code_id)
    if not result.succeeded:
        return _redirect_home("associate")
    return _redirect_home()


@router.post("/disassociate", tags=["associations"])
async def disassociate(
    contact_id: str = Form(...),
    zip_code_id: str = Form(""),
    config: HubSpotConfig = Depends(get_config),
    reconciler: AssociationReconciler = Depends(get_reconciler),
):
    result = await reconciler.disassociate(contact_id, config.custom_object_type, zip_code_id)
    if not result.succeeded:
        return _redirect_home("disassociate")
    return _redirect_home()
