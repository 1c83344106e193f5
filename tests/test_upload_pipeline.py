"""Tests for the normalize -> store stage and its cleanup on failure."""

from unittest.mock import patch

import pytest

from conftest import gradient_png, make_upload, small_jpeg, stored_files
from services.upload_pipeline import store_uploads, stored_uploads
from utils.errors import DecodeError, StorageWriteError


def _jpegs(n):
    return [make_upload(small_jpeg(), name=f"{i}.jpg", index=i) for i in range(n)]


def test_batch_is_stored_in_order(storage, uploads_root):
    stored = store_uploads(_jpegs(3), "cars", storage)

    assert [s.original_name for s in stored] == ["0.jpg", "1.jpg", "2.jpg"]
    assert [s.ordinal_index for s in stored] == [0, 1, 2]
    assert stored_files(uploads_root) == {s.url for s in stored}
    assert all(s.width == 64 and s.height == 48 for s in stored)


def test_storage_failure_mid_batch_removes_earlier_files(storage, uploads_root):
    real_store = storage.store

    def fail_fourth(*args, **kwargs):
        if mocked.call_count == 4:
            raise StorageWriteError()
        return real_store(*args, **kwargs)

    with patch.object(storage, "store", side_effect=fail_fourth) as mocked:
        with pytest.raises(StorageWriteError):
            store_uploads(_jpegs(5), "cars", storage)

    assert mocked.call_count == 4
    assert stored_files(uploads_root) == set()


def test_failing_cleanup_does_not_mask_the_storage_error(storage, uploads_root):
    real_store = storage.store

    def fail_third(*args, **kwargs):
        if mocked_store.call_count == 3:
            raise StorageWriteError()
        return real_store(*args, **kwargs)

    with patch.object(storage, "store", side_effect=fail_third) as mocked_store, \
            patch.object(storage, "_delete", side_effect=OSError("disk gone")) as mocked_delete:
        with pytest.raises(StorageWriteError):
            store_uploads(_jpegs(5), "cars", storage)

    assert mocked_delete.call_count == 2
    assert len(stored_files(uploads_root)) == 2


def test_decode_failure_mid_batch_removes_earlier_files(storage, uploads_root):
    files = _jpegs(2) + [make_upload(b"plain text", name="notes.jpg", index=2)]

    with pytest.raises(DecodeError):
        store_uploads(files, "cars", storage)

    assert stored_files(uploads_root) == set()


def test_oversized_upload_is_stored_normalized(storage, uploads_root, monkeypatch):
    import config
    monkeypatch.setattr(config, "MAX_FILE_SIZE", 2 * 1024 * 1024)

    stored = store_uploads([make_upload(gradient_png(1500, 1400), name="big.png")], "cars", storage)

    assert stored[0].content_type == "image/jpeg"
    assert stored[0].width == 1200
    assert stored[0].url.endswith(".jpg")
    assert stored[0].size_bytes <= 2 * 1024 * 1024


def test_failure_inside_block_discards_stored_files(storage, uploads_root):
    with pytest.raises(RuntimeError):
        with stored_uploads(_jpegs(2), "cars", storage) as stored:
            assert len(stored_files(uploads_root)) == 2
            raise RuntimeError("commit failed")

    assert stored_files(uploads_root) == set()


def test_successful_block_keeps_files(storage, uploads_root):
    with stored_uploads(_jpegs(2), "cars", storage) as stored:
        urls = {s.url for s in stored}
    assert stored_files(uploads_root) == urls
