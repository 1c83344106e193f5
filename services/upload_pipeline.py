# services/upload_pipeline.py
"""
normalize -> store stage of the upload pipeline (ingestion lives in utils/multipart.py).

Files are processed in body order. A failure on file k deletes files 0..k-1 that this
batch already stored before the error propagates, and `stored_uploads()` extends the
same cleanup to whatever runs inside its block (typically the DB commit).
"""
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

from services.image_normalizer import normalize
from services.storage_service import StorageBackend, get_storage
from utils.multipart import UploadedFile

logger = logging.getLogger(__name__)


@dataclass
class StoredUpload:
    url: str
    field_name: str
    ordinal_index: int
    original_name: str
    content_type: str
    width: int
    height: int
    size_bytes: int


def process_file(upload: UploadedFile, folder: str, storage: Optional[StorageBackend] = None) -> StoredUpload:
    storage = storage or get_storage()
    normalized = normalize(upload.read(), name=upload.original_name)
    url = storage.store(normalized.data, folder, upload.original_name, normalized.content_type)
    return StoredUpload(
        url=url,
        field_name=upload.field_name,
        ordinal_index=upload.ordinal_index,
        original_name=upload.original_name,
        content_type=normalized.content_type,
        width=normalized.width,
        height=normalized.height,
        size_bytes=len(normalized.data),
    )


def discard(urls: Iterable[str], storage: Optional[StorageBackend] = None) -> None:
    """Delete stored objects best-effort; never raises."""
    storage = storage or get_storage()
    for url in urls:
        storage.delete(url)


def store_uploads(
    files: Sequence[UploadedFile],
    folder: str,
    storage: Optional[StorageBackend] = None,
) -> List[StoredUpload]:
    storage = storage or get_storage()
    started = time.monotonic()
    stored: List[StoredUpload] = []
    try:
        for upload in files:
            stored.append(process_file(upload, folder, storage))
    except Exception:
        logger.warning(
            "upload batch to %s failed at file %d of %d; removing %d stored file(s)",
            folder, len(stored) + 1, len(files), len(stored),
        )
        discard([s.url for s in stored], storage)
        raise
    if files:
        logger.info(
            "stored %d file(s) in %s in %.2fs", len(stored), folder, time.monotonic() - started
        )
    return stored


@contextmanager
def stored_uploads(
    files: Sequence[UploadedFile],
    folder: str,
    storage: Optional[StorageBackend] = None,
) -> Iterator[List[StoredUpload]]:
    """
    Store `files`, then run the block. If the block raises, the files stored here
    are deleted again so no orphan survives a failed DB write.
    """
    storage = storage or get_storage()
    stored = store_uploads(files, folder, storage)
    try:
        yield stored
    except BaseException:
        if stored:
            logger.warning("rolling back %d stored file(s) in %s", len(stored), folder)
            discard([s.url for s in stored], storage)
        raise
