# tests/test_storage_utils.py
import re

from app.core import storage_utils
from app.core.storage_utils import delete_stored_image, generate_filename, save_upload


def test_generate_filename_shape():
    name = generate_filename("image", "png")
    assert re.fullmatch(r"image-\d{13}-\d{1,10}\.png", name)


def test_save_upload_writes_file(upload_dir):
    url = save_upload("image", "jpg", b"jpeg-bytes")

    assert url.startswith("/uploads/image-")
    assert url.endswith(".jpg")
    stored = upload_dir / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"jpeg-bytes"


def test_save_upload_never_reuses_a_name(upload_dir):
    urls = {save_upload("image", "png", b"x") for _ in range(20)}
    assert len(urls) == 20
    assert len(list(upload_dir.iterdir())) == 20


def test_delete_stored_image_is_idempotent(upload_dir):
    url = save_upload("image", "png", b"x")

    assert delete_stored_image(url) is True
    assert delete_stored_image(url) is False
    assert list(upload_dir.iterdir()) == []


def test_delete_stored_image_ignores_external_urls(upload_dir):
    (upload_dir / "keep.png").write_bytes(b"x")

    assert delete_stored_image("https://cdn.example.com/keep.png") is False
    assert delete_stored_image(None) is False
    assert (upload_dir / "keep.png").exists()


def test_delete_stored_image_accepts_bare_filename(upload_dir):
    (upload_dir / "legacy.jpeg").write_bytes(b"x")

    assert delete_stored_image("legacy.jpeg") is True
    assert not (upload_dir / "legacy.jpeg").exists()


def test_delete_stored_image_survives_unusable_upload_dir(monkeypatch):
    def broken_dir():
        raise PermissionError("upload dir not accessible")

    monkeypatch.setattr(storage_utils, "upload_dir", broken_dir)

    assert delete_stored_image("/uploads/x.png") is False
