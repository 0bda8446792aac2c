from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, Header, Query, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.db.engine import get_db
from app.dependencies import require_property_editor
from app.errors import ValidationError
from app.schemas import PropertyRead, PropertyUpdate
from app.services.auth import AuthContext
from app.services.image_store import read_uploads

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _parse_version(if_match: str | None) -> int | None:
    """Accept `3`, `"3"` or `W/"3"` from an If-Match header."""
    if if_match is None:
        return None
    raw = if_match.strip().removeprefix("W/").strip('"')
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("If-Match must carry a property version", fields=["If-Match"])


@router.get("", response_model=list[PropertyRead])
async def list_properties(
    location: str | None = Query(default=None),
    type: str | None = Query(default=None),
    status: str | None = Query(default=None),
    price_range: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    return await crud.list_properties(
        db, location=location, property_type=type, status=status,
        price_range=price_range, sort=sort,
    )


@router.get("/{property_id}", response_model=PropertyRead)
async def get_property(
    property_id: str,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    prop = await crud.get_property(db, property_id)
    response.headers["ETag"] = f'"{prop.version}"'
    return prop


@router.post("", response_model=PropertyRead, status_code=201)
async def create_property(
    title: str | None = Form(None),
    description: str | None = Form(None),
    price: str | None = Form(None),
    type: str | None = Form(None),
    bedrooms: str | None = Form(None),
    bathrooms: str | None = Form(None),
    area: str | None = Form(None),
    address: str | None = Form(None),
    city: str | None = Form(None),
    state: str | None = Form(None),
    zip_code: str | None = Form(None),
    amenities: list[str] | None = Form(None),
    featured: str | None = Form(None),
    status: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
    auth: AuthContext = Depends(require_property_editor),
    db: AsyncSession = Depends(get_db),
):
    """Create a listing from form fields plus up to 10 images."""
    uploads = await read_uploads(images or [])

    raw = {
        "title": title, "description": description, "price": price, "type": type,
        "bedrooms": bedrooms, "bathrooms": bathrooms, "area": area,
        "amenities": amenities, "featured": featured, "status": status,
    }
    fields = {k: v for k, v in raw.items() if v is not None}
    location = {
        k: v for k, v in
        {"address": address, "city": city, "state": state, "zip_code": zip_code}.items()
        if v is not None
    }
    if location:
        fields["location"] = location

    return await crud.create_property(db, fields, uploads, owner_id=auth.user_id)


@router.put("/{property_id}", response_model=PropertyRead)
async def update_property(
    property_id: str,
    body: PropertyUpdate,
    response: Response,
    if_match: str | None = Header(default=None),
    auth: AuthContext = Depends(require_property_editor),
    db: AsyncSession = Depends(get_db),
):
    prop = await crud.update_property(
        db, property_id, body.model_dump(exclude_unset=True),
        expected_version=_parse_version(if_match),
    )
    response.headers["ETag"] = f'"{prop.version}"'
    return prop


@router.delete("/{property_id}")
async def delete_property(
    property_id: str,
    auth: AuthContext = Depends(require_property_editor),
    db: AsyncSession = Depends(get_db),
):
    await crud.delete_property(db, property_id)
    logger.info("Property %s deleted by %s", property_id, auth.user_id)
    return {"deleted": property_id}
