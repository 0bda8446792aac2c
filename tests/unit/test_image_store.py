import io

import pytest
from fastapi import UploadFile
from PIL import Image
from starlette.datastructures import Headers

from app.errors import PayloadError
from app.services import image_store

from tests.helpers import make_image


def _upload(data: bytes, filename: str = "photo.png", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


async def test_read_uploads_accepts_supported_formats():
    uploads = await image_store.read_uploads([
        _upload(make_image("PNG")),
        _upload(make_image("JPEG"), "photo.jpg", "image/jpeg"),
        _upload(make_image("WEBP"), "photo.webp", "image/webp"),
    ])
    assert [u.format for u in uploads] == ["PNG", "JPEG", "WEBP"]
    assert [u.ext for u in uploads] == [".png", ".jpg", ".webp"]


async def test_read_uploads_allows_ten_images():
    uploads = await image_store.read_uploads([_upload(make_image()) for _ in range(10)])
    assert len(uploads) == 10


async def test_read_uploads_rejects_eleven_images():
    with pytest.raises(PayloadError) as exc:
        await image_store.read_uploads([_upload(make_image()) for _ in range(11)])
    assert exc.value.status_code == 413


async def test_read_uploads_rejects_non_image_content_type():
    with pytest.raises(PayloadError) as exc:
        await image_store.read_uploads([_upload(b"%PDF-1.4", "deed.pdf", "application/pdf")])
    assert exc.value.status_code == 415


async def test_read_uploads_rejects_bytes_that_are_not_an_image():
    with pytest.raises(PayloadError) as exc:
        await image_store.read_uploads([_upload(b"definitely not a png", "fake.png", "image/png")])
    assert exc.value.status_code == 415


async def test_save_and_delete_images(store_dir):
    uploads = await image_store.read_uploads([_upload(make_image()), _upload(make_image("JPEG"), "b.jpg", "image/jpeg")])
    refs = await image_store.save_images("01PROPERTY", uploads)
    assert refs == ["properties/01PROPERTY/001.png", "properties/01PROPERTY/002.jpg"]
    assert image_store.resolve(refs[0]).read_bytes() == uploads[0].data

    await image_store.delete_images(refs)
    assert not (store_dir / "properties" / "01PROPERTY").exists()


async def test_save_without_images_writes_nothing(store_dir):
    assert await image_store.save_images("01EMPTY", []) == []
    assert not (store_dir / "properties").exists()


async def test_read_uploads_rejects_decompression_bomb(monkeypatch):
    data = make_image(size=(64, 48))
    # Pillow refuses images over twice this pixel count outright
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(PayloadError) as exc:
        await image_store.read_uploads([_upload(data)])
    assert exc.value.status_code == 415
