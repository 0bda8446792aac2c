from datetime import datetime, timezone

import pytest

from app.db import crud
from app.errors import ConflictError, InvalidTransitionError, NotFoundError, ValidationError
from app.services.image_store import ImageUpload

from tests.helpers import listing_fields, make_image


async def test_create_and_get_property(db):
    prop = await crud.create_property(db, listing_fields())
    assert prop.id is not None
    assert prop.status == "available"
    assert prop.version == 1

    fetched = await crud.get_property(db, prop.id)
    assert fetched.title == "Sunny Bungalow"
    assert fetched.price == 350000
    assert fetched.location["zip_code"] == "62704"
    assert fetched.amenities == ["Garden", "Garage"]
    assert fetched.images == []


async def test_create_coerces_numeric_strings(db):
    prop = await crud.create_property(
        db, listing_fields(price="425000.50", bedrooms="3", bathrooms="2", area="1800", featured="true")
    )
    assert prop.price == 425000.50
    assert prop.bedrooms == 3
    assert prop.area == 1800
    assert prop.featured is True


async def test_create_lists_every_invalid_field(db):
    fields = listing_fields(title="  ", price=-1, type="castle")
    del fields["bedrooms"]
    with pytest.raises(ValidationError) as exc:
        await crud.create_property(db, fields)
    assert set(exc.value.fields) == {"title", "price", "type", "bedrooms"}
    assert await crud.count_properties(db) == 0


async def test_create_rejects_incomplete_location(db):
    fields = listing_fields(location={"address": "1 Main St", "city": "Springfield", "state": "IL"})
    with pytest.raises(ValidationError) as exc:
        await crud.create_property(db, fields)
    assert exc.value.fields == ["location.zip_code"]


async def test_amenities_are_deduplicated(db):
    prop = await crud.create_property(db, listing_fields(amenities=["Pool", "Gym", "Pool", " Gym "]))
    assert prop.amenities == ["Pool", "Gym"]


async def test_list_keeps_insertion_order(db):
    for title in ("First", "Second", "Third"):
        await crud.create_property(db, listing_fields(title=title))
    props = await crud.list_properties(db)
    assert [p.title for p in props] == ["First", "Second", "Third"]


async def test_list_filters_and_sorts(db):
    await crud.create_property(db, listing_fields(title="Cheap", price=200000, type="condo"))
    await crud.create_property(db, listing_fields(title="Mid", price=750000))
    await crud.create_property(db, listing_fields(
        title="Pricey", price=2500000, type="villa",
        location={"address": "1 Ocean Dr", "city": "Miami", "state": "FL", "zip_code": "33139"},
    ))

    assert [p.title for p in await crud.list_properties(db, price_range="0-500000")] == ["Cheap"]
    assert [p.title for p in await crud.list_properties(db, price_range="2000000+")] == ["Pricey"]
    assert [p.title for p in await crud.list_properties(db, property_type="condo")] == ["Cheap"]
    assert [p.title for p in await crud.list_properties(db, location="miami")] == ["Pricey"]
    by_price = await crud.list_properties(db, sort="price_desc")
    assert [p.title for p in by_price] == ["Pricey", "Mid", "Cheap"]


async def test_list_rejects_unknown_sort(db):
    with pytest.raises(ValidationError):
        await crud.list_properties(db, sort="random")


async def test_get_missing_property(db):
    with pytest.raises(NotFoundError):
        await crud.get_property(db, "nonexistent")


async def test_update_merges_fields(db):
    prop = await crud.create_property(db, listing_fields())
    updated = await crud.update_property(db, prop.id, {"price": 360000, "featured": True})
    assert updated.price == 360000
    assert updated.featured is True
    assert updated.title == "Sunny Bungalow"
    assert updated.version == 2


async def test_update_negative_price_leaves_record_unchanged(db):
    prop = await crud.create_property(db, listing_fields())
    with pytest.raises(ValidationError) as exc:
        await crud.update_property(db, prop.id, {"price": -5})
    assert exc.value.fields == ["price"]

    fetched = await crud.get_property(db, prop.id)
    assert fetched.price == 350000
    assert fetched.version == 1


async def test_update_rejects_null_for_required_field(db):
    prop = await crud.create_property(db, listing_fields())
    with pytest.raises(ValidationError):
        await crud.update_property(db, prop.id, {"title": None})


async def test_empty_update_keeps_version(db):
    prop = await crud.create_property(db, listing_fields())
    stamped = prop.updated_at
    unchanged = await crud.update_property(db, prop.id, {}, expected_version=1)
    assert unchanged.version == 1
    assert unchanged.updated_at == stamped
    # The original version still matches
    updated = await crud.update_property(db, prop.id, {"price": 1}, expected_version=1)
    assert updated.version == 2


async def test_update_missing_property(db):
    with pytest.raises(NotFoundError):
        await crud.update_property(db, "nonexistent", {"price": 1})


async def test_update_with_stale_version_conflicts(db):
    prop = await crud.create_property(db, listing_fields())
    await crud.update_property(db, prop.id, {"price": 1}, expected_version=1)
    with pytest.raises(ConflictError):
        await crud.update_property(db, prop.id, {"price": 2}, expected_version=1)
    assert (await crud.get_property(db, prop.id)).price == 1


async def test_delete_twice_raises_not_found(db):
    prop = await crud.create_property(db, listing_fields())
    await crud.delete_property(db, prop.id)
    with pytest.raises(NotFoundError):
        await crud.get_property(db, prop.id)
    with pytest.raises(NotFoundError):
        await crud.delete_property(db, prop.id)


async def test_create_with_images_and_delete_removes_files(db, store_dir):
    uploads = [ImageUpload("a.png", make_image(), "PNG"), ImageUpload("b.jpg", make_image("JPEG"), "JPEG")]
    prop = await crud.create_property(db, listing_fields(), uploads)
    assert prop.images == [f"properties/{prop.id}/001.png", f"properties/{prop.id}/002.jpg"]
    for ref in prop.images:
        assert (store_dir / ref).is_file()

    await crud.delete_property(db, prop.id)
    assert not (store_dir / "properties" / prop.id).exists()


async def test_failed_write_removes_stored_images(db, store_dir, monkeypatch):
    async def failing_commit():
        raise RuntimeError("disk full")

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(RuntimeError):
        await crud.create_property(db, listing_fields(), [ImageUpload("a.png", make_image(), "PNG")])

    stored = list((store_dir / "properties").rglob("*.png")) if (store_dir / "properties").exists() else []
    assert stored == []


async def test_schedule_transitions(db, users):
    prop = await crud.create_property(db, listing_fields())
    buyer = await crud.get_user(db, users["buyer"].id)
    schedule = await crud.create_schedule(db, prop, buyer, datetime(2026, 11, 2, 15, tzinfo=timezone.utc))
    assert schedule.status == "pending"
    assert schedule.property_title == "Sunny Bungalow"
    assert schedule.property_address == "12 Elm St, Springfield, IL, 62704"
    assert schedule.user_email == "buyer@example.com"

    with pytest.raises(InvalidTransitionError):
        await crud.update_schedule_status(db, schedule.id, "completed")

    schedule = await crud.update_schedule_status(db, schedule.id, "confirmed")
    schedule = await crud.update_schedule_status(db, schedule.id, "completed")
    assert schedule.status == "completed"

    with pytest.raises(InvalidTransitionError):
        await crud.update_schedule_status(db, schedule.id, "cancelled")


@pytest.mark.parametrize("current,new,allowed", [
    ("pending", "confirmed", True),
    ("pending", "cancelled", True),
    ("confirmed", "completed", True),
    ("confirmed", "cancelled", False),
    ("cancelled", "pending", False),
    ("completed", "confirmed", False),
    ("pending", "pending", False),
])
def test_can_transition(current, new, allowed):
    assert crud.can_transition(current, new) is allowed


async def test_list_users_search_and_role(db, users):
    admins = await crud.list_users(db, role="admin")
    assert [u.email for u in admins] == ["admin@example.com"]
    found = await crud.list_users(db, search="SELLER")
    assert [u.role for u in found] == ["seller"]


async def test_create_user_duplicate_email(db, users):
    with pytest.raises(ConflictError):
        await crud.create_user(db, "Admin@Example.com", "x")
