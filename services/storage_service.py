# services/storage_service.py
"""
Storage backends for uploaded images.

Every backend answers the same three calls and hands back / accepts opaque URL
strings, so nothing above this module knows where bytes live:

    store(data, folder, suggested_name, content_type) -> url
    delete(url)                                        -> None (best-effort)
    read(url)                                          -> bytes

STORAGE_BACKEND=local writes under UPLOADS_ROOT and returns '/uploads/<folder>/<name>';
STORAGE_BACKEND=azure writes to an Azure Blob container and returns the blob URL.
"""
import abc
import errno
import logging
import mimetypes
import re
import secrets
import time
from functools import lru_cache
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

import config
from utils.errors import NotFoundError, StorageDeleteError, StorageWriteError

logger = logging.getLogger(__name__)

_FOLDER_RE = re.compile(r"^[A-Za-z0-9_-]+(/[A-Za-z0-9_-]+)*$")


# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────
def _guess_ext(content_type: Optional[str], fallback: str = ".bin") -> str:
    if content_type in ("image/jpeg", "image/jpg"):
        return ".jpg"
    exts = mimetypes.guess_all_extensions(content_type or "") or []
    return exts[0] if exts else fallback


def unique_name(suggested_name: Optional[str], content_type: Optional[str] = None) -> str:
    """
    '<millis>-<random hex><ext>'. The extension follows the content type when known,
    otherwise the suggested name's suffix.
    """
    ext = _guess_ext(content_type, "") if content_type else ""
    if not ext and suggested_name:
        suffix = Path(suggested_name).suffix.lower()
        ext = suffix if re.fullmatch(r"\.[a-z0-9]{1,5}", suffix) else ""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{ext or '.bin'}"


def _check_folder(folder: str) -> None:
    if not _FOLDER_RE.match(folder or ""):
        raise StorageWriteError(status=400)


class StorageBackend(abc.ABC):
    name = "base"

    @abc.abstractmethod
    def store(self, data: bytes, folder: str, suggested_name: str, content_type: Optional[str] = None) -> str:
        raise NotImplementedError

    def delete(self, url: str) -> None:
        """Best-effort removal; never raises."""
        if not url:
            return
        try:
            self._delete(url)
        except Exception:
            # superseded data only; never fail the write that triggered it
            logger.warning("storage delete failed for %s", url, exc_info=True)

    @abc.abstractmethod
    def read(self, url: str) -> bytes:
        raise NotImplementedError

    @abc.abstractmethod
    def _delete(self, url: str) -> None:
        raise NotImplementedError


# ────────────────────────────────────────────────────────────
# Local disk
# ────────────────────────────────────────────────────────────
class LocalDiskStorage(StorageBackend):
    name = "local"

    def __init__(self, root: str, url_prefix: str = "/uploads"):
        self.root = Path(root).resolve()
        self.url_prefix = url_prefix.rstrip("/")

    def resolve(self, url: str) -> Optional[Path]:
        """Map a '/uploads/...' URL (or a path relative to the root) to a file under root."""
        rel = url
        if rel.startswith(self.url_prefix + "/"):
            rel = rel[len(self.url_prefix) + 1:]
        elif rel.startswith("/") or "://" in rel:
            return None
        candidate = (self.root / unquote(rel)).resolve()
        try:
            candidate.relative_to(self.root)
        except ValueError:
            return None
        return candidate

    def store(self, data: bytes, folder: str, suggested_name: str, content_type: Optional[str] = None) -> str:
        _check_folder(folder)
        target_dir = self.root / folder
        name = unique_name(suggested_name, content_type)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            # 'xb' refuses to overwrite an existing file
            with open(target_dir / name, "xb") as fh:
                fh.write(data)
        except FileExistsError as e:
            raise StorageWriteError() from e
        except OSError as e:
            logger.error("local store failed in %s: %s", target_dir, e)
            raise StorageWriteError() from e
        logger.info("stored %d bytes at %s/%s", len(data), folder, name)
        return f"{self.url_prefix}/{folder}/{name}"

    def _delete(self, url: str) -> None:
        path = self.resolve(url)
        if path is None:
            logger.info("skip delete of %s: not a local upload", url)
            return
        try:
            path.unlink()
            logger.info("deleted %s", url)
        except FileNotFoundError:
            return
        except OSError as e:
            if e.errno == errno.ENOENT:
                return
            raise StorageDeleteError() from e

    def read(self, url: str) -> bytes:
        path = self.resolve(url)
        if path is None or not path.is_file():
            raise NotFoundError()
        return path.read_bytes()


# ────────────────────────────────────────────────────────────
# Azure Blob Storage
# ────────────────────────────────────────────────────────────
class AzureBlobStorage(StorageBackend):
    name = "azure"

    def __init__(self, conn_str: str, container: str):
        if not conn_str:
            raise RuntimeError(
                "AZURE_BLOB_CONN_STRING is not set. For Azurite, use the devstore connection string."
            )
        self._bsc = BlobServiceClient.from_connection_string(conn_str)
        self._container = self._bsc.get_container_client(container)
        try:
            # public read so stored URLs stay durable without SAS tokens
            self._container.create_container(public_access="blob")
        except ResourceExistsError:
            pass

    @property
    def _prefix(self) -> str:
        return self._container.url.rstrip("/") + "/"

    def store(self, data: bytes, folder: str, suggested_name: str, content_type: Optional[str] = None) -> str:
        _check_folder(folder)
        blob_name = f"{folder}/{unique_name(suggested_name, content_type)}"
        blob = self._container.get_blob_client(blob_name)
        try:
            blob.upload_blob(
                data,
                overwrite=False,
                content_settings=ContentSettings(content_type=content_type or "application/octet-stream"),
            )
        except AzureError as e:
            logger.error("blob upload failed for %s: %s", blob_name, e)
            raise StorageWriteError() from e
        logger.info("stored %d bytes at blob %s", len(data), blob_name)
        return f"{self._prefix}{blob_name}"

    def _blob_name(self, url: str) -> Optional[str]:
        if not url.startswith(self._prefix):
            return None
        return unquote(url[len(self._prefix):].split("?", 1)[0])

    def _delete(self, url: str) -> None:
        blob_name = self._blob_name(url)
        if not blob_name:
            logger.info("skip delete of %s: not in container", url)
            return
        try:
            self._container.delete_blob(blob_name, delete_snapshots="include")
            logger.info("deleted blob %s", blob_name)
        except ResourceNotFoundError:
            return
        except AzureError as e:
            raise StorageDeleteError() from e

    def read(self, url: str) -> bytes:
        blob_name = self._blob_name(url)
        if not blob_name:
            raise NotFoundError()
        try:
            return self._container.download_blob(blob_name).readall()
        except ResourceNotFoundError as e:
            raise NotFoundError() from e


@lru_cache(maxsize=1)
def get_storage() -> StorageBackend:
    """Backend chosen by STORAGE_BACKEND; built once per worker."""
    if config.STORAGE_BACKEND == "azure":
        return AzureBlobStorage(config.AZURE_BLOB_CONN_STRING, config.AZURE_BLOB_CONTAINER)
    return LocalDiskStorage(config.UPLOADS_ROOT, config.UPLOADS_URL_PREFIX)
