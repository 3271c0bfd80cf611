import os

import pytest

from inappbrowser.errors import ValidationError
from inappbrowser.infra.scratch_store import ScratchStorage, local_path_from_file_uri

AUTHORITY = "com.test.fileprovider"


def test_create_unique_file_uses_prefix_and_timestamp(tmp_path):
    storage = ScratchStorage(cache_dir=str(tmp_path), authority=AUTHORITY)

    first = storage.create_unique_file("JPEG_", ".jpg")
    second = storage.create_unique_file("JPEG_", ".jpg")

    assert first != second
    name = os.path.basename(first)
    assert name.startswith("JPEG_")
    assert name.endswith(".jpg")
    # yyyyMMdd_HHmmss followed by a separator
    assert name[5:13].isdigit() and name[13] == "_" and name[14:20].isdigit()
    assert os.path.getsize(first) == 0


def test_content_uri_round_trips_to_local_path(tmp_path):
    storage = ScratchStorage(cache_dir=str(tmp_path), authority=AUTHORITY)
    path = storage.create_unique_file("VID_", ".mp4")

    uri = storage.content_uri_for(path)

    assert uri.startswith(f"content://{AUTHORITY}/cache/")
    assert storage.resolve_content_uri(uri) == os.path.join(str(tmp_path), os.path.basename(path))


def test_content_uri_rejects_files_outside_directory(tmp_path):
    storage = ScratchStorage(cache_dir=str(tmp_path / "scratch"), authority=AUTHORITY)
    outside = tmp_path / "other.jpg"
    outside.write_bytes(b"x")

    with pytest.raises(ValidationError):
        storage.content_uri_for(str(outside))


def test_resolve_content_uri_guards_foreign_and_traversal_uris(tmp_path):
    storage = ScratchStorage(cache_dir=str(tmp_path), authority=AUTHORITY)

    assert storage.resolve_content_uri("content://other.authority/cache/a.jpg") is None
    assert storage.resolve_content_uri(f"content://{AUTHORITY}/files/a.jpg") is None
    assert storage.resolve_content_uri(f"content://{AUTHORITY}/cache/..") is None
    assert storage.resolve_content_uri(f"content://{AUTHORITY}/cache/..%2Fsecret") is None
    assert storage.resolve_content_uri("https://example.com/a.jpg") is None
    assert storage.resolve_content_uri("file:///tmp/picked%20one.png") == "/tmp/picked one.png"


def test_file_size_and_discard(tmp_path):
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"abc")

    assert ScratchStorage.file_size(str(path)) == 3
    assert ScratchStorage.file_size(str(tmp_path / "missing.jpg")) == 0
    assert ScratchStorage.file_size(None) == 0

    ScratchStorage.discard(str(path))
    ScratchStorage.discard(str(path))
    assert not path.exists()


def test_local_file_uri(tmp_path):
    path = tmp_path / "doc.pdf"
    path.write_bytes(b"%PDF")

    assert ScratchStorage.local_file_uri(str(path)).startswith("file:///")


def test_file_uri_with_drive_letter_keeps_windows_path(tmp_path):
    storage = ScratchStorage(cache_dir=str(tmp_path), authority=AUTHORITY)

    assert storage.resolve_content_uri("file:///C:/Users/me/photo%20a.png") == "C:/Users/me/photo a.png"
    assert local_path_from_file_uri("file:///d:/scans/page.pdf") == "d:/scans/page.pdf"


def test_file_uri_with_host_maps_to_unc_path():
    assert local_path_from_file_uri("file://fileserver/share/doc.pdf") == "//fileserver/share/doc.pdf"
    assert local_path_from_file_uri("file://localhost/tmp/doc.pdf") == "/tmp/doc.pdf"
