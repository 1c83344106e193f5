"""Tests for the Azure Blob storage backend against a mocked container client."""

from unittest.mock import MagicMock, patch

import pytest
from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError

import config
from services.storage_service import AzureBlobStorage, get_storage
from utils.errors import NotFoundError, StorageWriteError

CONTAINER_URL = "https://alweam.blob.core.windows.net/uploads"


@pytest.fixture
def container():
    bsc = MagicMock()
    client = bsc.get_container_client.return_value
    client.url = CONTAINER_URL
    client.create_container.side_effect = ResourceExistsError("exists")
    with patch("services.storage_service.BlobServiceClient.from_connection_string", return_value=bsc):
        yield client


@pytest.fixture
def blob_storage(container):
    return AzureBlobStorage("UseDevelopmentStorage=true", "uploads")


def test_store_returns_blob_url_in_folder(blob_storage, container):
    url = blob_storage.store(b"abc", "cars", "front.jpg", "image/jpeg")

    assert url.startswith(CONTAINER_URL + "/cars/")
    assert url.endswith(".jpg")
    blob_name = container.get_blob_client.call_args.args[0]
    assert url == f"{CONTAINER_URL}/{blob_name}"
    upload = container.get_blob_client.return_value.upload_blob
    assert upload.call_args.kwargs["overwrite"] is False
    assert upload.call_args.kwargs["content_settings"].content_type == "image/jpeg"


def test_upload_failure_is_a_storage_write_error(blob_storage, container):
    container.get_blob_client.return_value.upload_blob.side_effect = AzureError("connection reset")
    with pytest.raises(StorageWriteError):
        blob_storage.store(b"abc", "news", "a.jpg", "image/jpeg")


def test_double_delete_is_quiet(blob_storage, container):
    container.delete_blob.side_effect = [None, ResourceNotFoundError("gone")]
    url = f"{CONTAINER_URL}/cars/a%20b.jpg?sv=2024-01-01&sig=x"

    blob_storage.delete(url)
    blob_storage.delete(url)

    assert container.delete_blob.call_count == 2
    assert container.delete_blob.call_args.args[0] == "cars/a b.jpg"


def test_transient_delete_error_is_not_raised(blob_storage, container):
    container.delete_blob.side_effect = AzureError("timeout")
    blob_storage.delete(f"{CONTAINER_URL}/cars/a.jpg")
    container.delete_blob.assert_called_once()


def test_foreign_url_is_skipped(blob_storage, container):
    blob_storage.delete("https://res.cloudinary.com/demo/image/upload/sample.jpg")
    blob_storage.delete("/uploads/cars/a.jpg")
    container.delete_blob.assert_not_called()
    with pytest.raises(NotFoundError):
        blob_storage.read("https://res.cloudinary.com/demo/image/upload/sample.jpg")


def test_missing_connection_string_is_refused():
    with pytest.raises(RuntimeError):
        AzureBlobStorage("", "uploads")


def test_get_storage_picks_azure(container, monkeypatch):
    monkeypatch.setattr(config, "STORAGE_BACKEND", "azure")
    monkeypatch.setattr(config, "AZURE_BLOB_CONN_STRING", "UseDevelopmentStorage=true")
    get_storage.cache_clear()

    assert isinstance(get_storage(), AzureBlobStorage)
