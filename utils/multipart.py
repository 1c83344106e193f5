# utils/multipart.py
"""
Multipart ingestion for upload routes.

parse_upload() decodes a multipart/form-data body part by part, validates every file
part (MIME allow-list first, then the size ceiling) and stages accepted bytes in
spooled temp files. The returned UploadBatch owns those temp files and closes them on
exit, so callers always use it as a context manager:

    with parse_upload(req, {"images": 10}) as batch:
        files = batch.files_for("images")
"""
from __future__ import annotations

import json
import logging
import mimetypes
import re
import tempfile
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from requests_toolbelt.multipart import decoder as mp

import config
from utils.errors import (
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)

log = logging.getLogger(__name__)

ALLOWED_CONTENT = {"image/jpeg", "image/jpg", "image/png", "image/webp"}
SPOOL_MAX_MEMORY = 1024 * 1024  # roll staged files over to disk past 1 MiB

_PARAM_RE = re.compile(r';\s*([\w*-]+)\s*=\s*(?:"((?:[^"\\]|\\.)*)"|([^;\s]*))')
_FIELD_SUFFIX_RE = re.compile(r"\[\d*\]$")


@dataclass
class UploadedFile:
    field_name: str
    original_name: str
    mime_type: str
    size_bytes: int
    ordinal_index: int
    stream: tempfile.SpooledTemporaryFile = field(repr=False)

    def read(self) -> bytes:
        self.stream.seek(0)
        return self.stream.read()

    def close(self) -> None:
        self.stream.close()


class UploadBatch:
    """Form fields plus staged files of one request, in body order."""

    def __init__(self, form: Optional[dict] = None, files: Optional[Dict[str, List[UploadedFile]]] = None):
        self.form = form or {}
        self.files = files or {}

    def files_for(self, field_name: str) -> List[UploadedFile]:
        return list(self.files.get(field_name, []))

    def first(self, field_name: str) -> Optional[UploadedFile]:
        items = self.files.get(field_name) or []
        return items[0] if items else None

    def all_files(self) -> List[UploadedFile]:
        return [f for items in self.files.values() for f in items]

    def close(self) -> None:
        for f in self.all_files():
            try:
                f.close()
            except OSError:
                log.warning("could not close staged upload %s", f.original_name, exc_info=True)

    def __enter__(self) -> "UploadBatch":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _disposition_params(disp: str) -> Dict[str, str]:
    params = {}
    for key, quoted, bare in _PARAM_RE.findall(disp):
        params[key.lower()] = quoted or bare
    return params


def _header(part, name: bytes) -> str:
    return part.headers.get(name, b"").decode("utf-8", "ignore")


def _field_name(raw: str) -> str:
    return _FIELD_SUFFIX_RE.sub("", raw)


def _content_type(req) -> str:
    return req.headers.get("content-type") or req.headers.get("Content-Type") or ""


def _add_form_value(form: dict, name: str, value: str) -> None:
    if name in form:
        existing = form[name]
        form[name] = existing + [value] if isinstance(existing, list) else [existing, value]
    else:
        form[name] = value


def _stage(data: bytes) -> tempfile.SpooledTemporaryFile:
    stream = tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_MEMORY)
    stream.write(data)
    stream.seek(0)
    return stream


def validate_file(name: str, mime_type: str, size: int, max_size: int) -> None:
    if mime_type not in ALLOWED_CONTENT:
        raise UnsupportedMediaTypeError()
    if size > max_size:
        raise PayloadTooLargeError(name=name, limit=max_size)


def parse_upload(
    req,
    file_fields: Mapping[str, int],
    max_size: Optional[int] = None,
) -> UploadBatch:
    """
    Parse the request body into an UploadBatch.

    file_fields maps each accepted file field to its maximum file count. JSON bodies
    (and empty bodies) are accepted too and produce a batch without files. Any invalid
    part rejects the whole request; files staged before the failure are closed.
    """
    max_size = max_size if max_size is not None else config.MAX_UPLOAD_SIZE
    ctype = _content_type(req)
    body = req.get_body() or b""

    if "multipart/form-data" not in ctype.lower():
        if not body.strip():
            return UploadBatch()
        if "json" not in ctype.lower():
            raise ValidationError("multipartRequired")
        try:
            data = json.loads(body)
        except ValueError:
            raise ValidationError("invalidBody")
        if not isinstance(data, dict):
            raise ValidationError("invalidBody")
        return UploadBatch(form=data)

    try:
        parts = mp.MultipartDecoder(body, ctype).parts
    except (mp.ImproperBodyPartContentException, mp.NonMultipartContentTypeException, ValueError):
        raise ValidationError("invalidBody")

    batch = UploadBatch()
    try:
        for part in parts:
            disp = _header(part, b"Content-Disposition")
            params = _disposition_params(disp)
            raw_name = params.get("name")
            if not raw_name:
                continue
            name = _field_name(raw_name)

            if "filename" not in params:
                _add_form_value(batch.form, name, part.content.decode("utf-8", "replace"))
                continue

            filename = params.get("filename") or ""
            data = part.content
            if not filename and not data:
                # browsers send an empty part for an untouched file input
                continue

            if name not in file_fields:
                raise ValidationError("unexpectedField", field=name)
            current = batch.files.setdefault(name, [])
            if len(current) >= file_fields[name]:
                raise ValidationError("tooManyFiles", field=name, max=file_fields[name])

            mime_type = _header(part, b"Content-Type").split(";")[0].strip().lower()
            if not mime_type:
                guess, _ = mimetypes.guess_type(filename)
                mime_type = guess or "application/octet-stream"

            validate_file(filename or name, mime_type, len(data), max_size)
            if not data:
                raise ValidationError("imageDecodeFailed", name=filename)

            current.append(
                UploadedFile(
                    field_name=name,
                    original_name=filename or f"{name}-{len(current)}",
                    mime_type=mime_type,
                    size_bytes=len(data),
                    ordinal_index=len(current),
                    stream=_stage(data),
                )
            )
    except BaseException:
        batch.close()
        raise

    log.info(
        "parsed multipart body: %d form field(s), %d file(s)",
        len(batch.form),
        len(batch.all_files()),
    )
    return batch
