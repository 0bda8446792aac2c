"""CRUD operations for listings, users and viewing schedules."""

from __future__ import annotations

import logging
from datetime import datetime

import pydantic
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ConflictError, InvalidTransitionError, NotFoundError, ValidationError
from app.models import Property, Schedule, User
from app.models.base import new_id
from app.schemas import PropertyCreate, PropertyUpdate
from app.services import image_store
from app.services.image_store import ImageUpload
from app.services.search import matches_location, parse_price_range

logger = logging.getLogger(__name__)


def _validation_error(exc: pydantic.ValidationError) -> ValidationError:
    fields = []
    for err in exc.errors():
        name = ".".join(str(part) for part in err["loc"])
        if name not in fields:
            fields.append(name)
    return ValidationError(f"Invalid fields: {', '.join(fields)}", fields=fields)


# ── Property ─────────────────────────────────────────────

_SORTS = {
    "newest": (Property.created_at.desc(),),
    "price_asc": (Property.price.asc(), Property.created_at),
    "price_desc": (Property.price.desc(), Property.created_at),
    "featured": (Property.featured.desc(), Property.created_at),
}


async def list_properties(
    db: AsyncSession,
    *,
    location: str | None = None,
    property_type: str | None = None,
    status: str | None = None,
    price_range: str | None = None,
    sort: str | None = None,
) -> list[Property]:
    """All listings in insertion order; filters apply only when given."""
    stmt = select(Property)
    if property_type:
        stmt = stmt.where(Property.type == property_type)
    if status:
        stmt = stmt.where(Property.status == status)
    low, high = parse_price_range(price_range)
    if low is not None:
        stmt = stmt.where(Property.price >= low)
    if high is not None:
        stmt = stmt.where(Property.price <= high)
    if sort and sort not in _SORTS:
        raise ValidationError(f"Unknown sort key: {sort}", fields=["sort"])
    stmt = stmt.order_by(*_SORTS.get(sort, (Property.created_at,)))
    result = await db.execute(stmt)
    props = list(result.scalars().all())
    if location:
        props = [p for p in props if matches_location(p.location or {}, location)]
    return props


async def count_properties(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Property))
    return result.scalar_one()


async def get_property(db: AsyncSession, property_id: str) -> Property:
    prop = await db.get(Property, property_id)
    if not prop:
        raise NotFoundError("Property not found")
    return prop


async def create_property(
    db: AsyncSession,
    fields: dict,
    images: list[ImageUpload] | None = None,
    owner_id: str | None = None,
) -> Property:
    """Validate, store images, then write the record.

    Stored images are deleted again if the record cannot be committed.
    """
    try:
        data = PropertyCreate.model_validate(fields)
    except pydantic.ValidationError as exc:
        raise _validation_error(exc) from exc

    property_id = new_id()
    refs = await image_store.save_images(property_id, images or [])
    prop = Property(
        id=property_id,
        **data.model_dump(),
        images=refs,
        owner_id=owner_id,
    )
    db.add(prop)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error("Write failed for property %s, removing %d stored images", property_id, len(refs))
        await image_store.delete_images(refs)
        raise
    await db.refresh(prop)
    logger.info("Created property %s (%s) with %d images", prop.id, prop.title, len(refs))
    return prop


async def update_property(
    db: AsyncSession,
    property_id: str,
    partial: dict,
    expected_version: int | None = None,
) -> Property:
    """Merge the provided fields into the record; others stay unchanged."""
    prop = await get_property(db, property_id)
    try:
        data = PropertyUpdate.model_validate(partial)
    except pydantic.ValidationError as exc:
        raise _validation_error(exc) from exc

    changes = data.model_dump(exclude_unset=True)
    nulls = [k for k, v in changes.items() if v is None]
    if nulls:
        raise ValidationError(f"Fields cannot be null: {', '.join(nulls)}", fields=nulls)
    if expected_version is not None and expected_version != prop.version:
        raise ConflictError(
            f"Property was modified (version {prop.version}, expected {expected_version})"
        )

    if not changes:
        return prop

    for k, v in changes.items():
        setattr(prop, k, v)
    prop.version += 1
    await db.commit()
    await db.refresh(prop)
    logger.info("Updated property %s (%s) -> version %d", prop.id, ", ".join(changes), prop.version)
    return prop


async def delete_property(db: AsyncSession, property_id: str) -> None:
    prop = await get_property(db, property_id)
    refs = list(prop.images or [])
    await db.delete(prop)
    await db.commit()
    await image_store.delete_images(refs)
    logger.info("Deleted property %s", property_id)


# ── User ─────────────────────────────────────────────────

async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(func.lower(User.email) == email.strip().lower()))
    return result.scalars().first()


async def create_user(
    db: AsyncSession, email: str, password_hash: str,
    display_name: str = "", phone: str = "", role: str = "buyer",
) -> User:
    if await get_user_by_email(db, email):
        raise ConflictError("User with this email already exists")
    user = User(
        email=email.strip().lower(), password_hash=password_hash,
        display_name=display_name, phone=phone, role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


async def list_users(db: AsyncSession, search: str = "", role: str | None = None) -> list[User]:
    stmt = select(User).order_by(User.created_at)
    if role:
        stmt = stmt.where(User.role == role)
    if search.strip():
        needle = f"%{search.strip().lower()}%"
        stmt = stmt.where(or_(func.lower(User.display_name).like(needle), func.lower(User.email).like(needle)))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_user(db: AsyncSession, user: User, **kwargs) -> User:
    for k, v in kwargs.items():
        if v is not None:
            setattr(user, k, v)
    await db.commit()
    await db.refresh(user)
    return user


# ── Schedule ─────────────────────────────────────────────

ALLOWED_TRANSITIONS = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"completed"},
}


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, set())


async def create_schedule(
    db: AsyncSession, prop: Property, user: User,
    scheduled_date: datetime, contact_method: str = "email", message: str = "",
) -> Schedule:
    loc = prop.location or {}
    address = ", ".join(
        part for part in (loc.get("address"), loc.get("city"), loc.get("state"), loc.get("zip_code")) if part
    )
    schedule = Schedule(
        property_id=prop.id, property_title=prop.title, property_address=address,
        user_id=user.id, user_name=user.display_name, user_email=user.email,
        scheduled_date=scheduled_date, contact_method=contact_method, message=message,
    )
    db.add(schedule)
    await db.commit()
    await db.refresh(schedule)
    return schedule


async def list_schedules(
    db: AsyncSession, status: str | None = None, user_id: str | None = None,
) -> list[Schedule]:
    stmt = select(Schedule).order_by(Schedule.scheduled_date)
    if status:
        stmt = stmt.where(Schedule.status == status)
    if user_id:
        stmt = stmt.where(Schedule.user_id == user_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_schedule(db: AsyncSession, schedule_id: str) -> Schedule:
    schedule = await db.get(Schedule, schedule_id)
    if not schedule:
        raise NotFoundError("Schedule not found")
    return schedule


async def update_schedule_status(db: AsyncSession, schedule_id: str, status: str) -> Schedule:
    schedule = await get_schedule(db, schedule_id)
    if not can_transition(schedule.status, status):
        raise InvalidTransitionError(f"Cannot move schedule from {schedule.status} to {status}")
    previous = schedule.status
    schedule.status = status
    await db.commit()
    await db.refresh(schedule)
    logger.info("Schedule %s: %s -> %s", schedule.id, previous, status)
    return schedule


async def delete_schedule(db: AsyncSession, schedule_id: str) -> None:
    schedule = await get_schedule(db, schedule_id)
    await db.delete(schedule)
    await db.commit()
