"""Tests for the local storage backend."""

import logging
import re
from unittest.mock import patch

import pytest

from services.storage_service import LocalDiskStorage, StorageBackend, get_storage, unique_name
from utils.errors import NotFoundError, StorageWriteError


def test_store_then_read_round_trip(storage, uploads_root):
    url = storage.store(b"abc", "cars", "front.jpg", "image/jpeg")

    assert url.startswith("/uploads/cars/")
    assert url.endswith(".jpg")
    assert storage.read(url) == b"abc"
    assert (uploads_root / url[len("/uploads/"):]).is_file()


def test_names_are_unique_for_the_same_suggested_name(storage):
    first = storage.store(b"1", "cars", "same.jpg", "image/jpeg")
    second = storage.store(b"2", "cars", "same.jpg", "image/jpeg")
    assert first != second
    assert storage.read(first) == b"1"


def test_unique_name_shape():
    name = unique_name("Photo.PNG", None)
    assert re.fullmatch(r"\d+-[0-9a-f]{16}\.png", name)
    assert unique_name("x", "image/jpeg").endswith(".jpg")


def test_delete_is_idempotent(storage):
    url = storage.store(b"abc", "news", "a.jpg", "image/jpeg")
    storage.delete(url)
    storage.delete(url)
    with pytest.raises(NotFoundError):
        storage.read(url)


def test_delete_of_foreign_url_is_a_no_op(storage):
    storage.delete("https://res.cloudinary.com/demo/image/upload/sample.jpg")
    storage.delete("")


def test_path_traversal_is_refused(storage, uploads_root, tmp_path):
    secret = tmp_path / "secret.txt"
    secret.write_text("nope")
    assert storage.resolve("/uploads/../secret.txt") is None
    with pytest.raises(NotFoundError):
        storage.read("/uploads/../secret.txt")
    storage.delete("/uploads/../secret.txt")
    assert secret.exists()


def test_invalid_folder_is_rejected(storage):
    with pytest.raises(StorageWriteError):
        storage.store(b"abc", "../escape", "a.jpg", "image/jpeg")


def test_get_storage_defaults_to_local(uploads_root):
    backend = get_storage()
    assert isinstance(backend, LocalDiskStorage)
    assert backend.root == uploads_root.resolve()


def test_delete_failure_is_logged_not_raised(storage, uploads_root, caplog):
    url = storage.store(b"abc", "cars", "a.jpg", "image/jpeg")
    path = storage.resolve(url)

    with patch.object(type(path), "unlink", side_effect=PermissionError(13, "Permission denied")):
        with caplog.at_level(logging.WARNING, logger="services.storage_service"):
            storage.delete(url)

    assert path.exists()
    assert "storage delete failed" in caplog.text


def test_backend_must_implement_every_operation():
    class StoreOnly(StorageBackend):
        def store(self, data, folder, suggested_name, content_type=None):
            return "x"

    with pytest.raises(TypeError):
        StoreOnly()
