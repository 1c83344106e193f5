"""Shared fixtures: a throwaway SQLite database, local storage under tmp_path, images."""

import io
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="alweam-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["STORAGE_BACKEND"] = "local"

import pytest
from PIL import Image

import config
from db import engine
from models import Base
from services.storage_service import get_storage
from utils.multipart import UploadedFile


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def uploads_root(tmp_path, monkeypatch):
    """Local storage rooted in a per-test directory."""
    root = tmp_path / "uploads"
    monkeypatch.setattr(config, "STORAGE_BACKEND", "local")
    monkeypatch.setattr(config, "UPLOADS_ROOT", str(root))
    get_storage.cache_clear()
    yield root
    get_storage.cache_clear()


@pytest.fixture
def storage(uploads_root):
    return get_storage()


def stored_files(root):
    """Every file currently under the uploads root, as '/uploads/...' URLs."""
    if not root.exists():
        return set()
    return {"/uploads/" + p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


# ────────────────────────────────────────────────────────────
# Images
# ────────────────────────────────────────────────────────────
def gradient_png(width: int, height: int) -> bytes:
    """Smooth RGB gradient stored uncompressed, so the byte size is ~width*height*3."""
    g = Image.linear_gradient("L")
    red = g.resize((width, height))
    green = g.transpose(Image.Transpose.ROTATE_90).resize((width, height))
    im = Image.merge("RGB", (red, green, red))
    out = io.BytesIO()
    im.save(out, format="PNG", compress_level=0)
    return out.getvalue()


def noise_png(width: int, height: int) -> bytes:
    im = Image.frombytes("RGB", (width, height), os.urandom(width * height * 3))
    out = io.BytesIO()
    im.save(out, format="PNG")
    return out.getvalue()


def small_jpeg(width: int = 64, height: int = 48, color=(200, 30, 30)) -> bytes:
    out = io.BytesIO()
    Image.new("RGB", (width, height), color).save(out, format="JPEG", quality=90)
    return out.getvalue()


def make_upload(data: bytes, name: str = "photo.jpg", field: str = "images",
                index: int = 0, mime_type: str = "image/jpeg") -> UploadedFile:
    stream = tempfile.SpooledTemporaryFile(max_size=1024 * 1024)
    stream.write(data)
    stream.seek(0)
    return UploadedFile(
        field_name=field,
        original_name=name,
        mime_type=mime_type,
        size_bytes=len(data),
        ordinal_index=index,
        stream=stream,
    )


# ────────────────────────────────────────────────────────────
# Auth
# ────────────────────────────────────────────────────────────
@pytest.fixture
def admin():
    from services.admin_service import create_admin
    return create_admin({
        "name": "Root",
        "mobile": "0500000000",
        "email": "root@alweamcars.com",
        "password": "secret123",
    })


@pytest.fixture
def auth_headers(admin):
    from auth.token import create_admin_token
    return {"Authorization": f"Bearer {create_admin_token(admin['id'])}"}


# ────────────────────────────────────────────────────────────
# Requests
# ────────────────────────────────────────────────────────────
def multipart_request(fields, method="POST", url="/api/cars", route_params=None,
                      params=None, headers=None):
    """func.HttpRequest with a multipart body built from `fields` (list of tuples)."""
    import azure.functions as func
    from requests_toolbelt import MultipartEncoder

    encoder = MultipartEncoder(fields=fields)
    return func.HttpRequest(
        method=method,
        url=url,
        headers={"Content-Type": encoder.content_type, **(headers or {})},
        params=params or {},
        route_params=route_params or {},
        body=encoder.to_string(),
    )


def json_request(payload=None, method="GET", url="/api", route_params=None,
                 params=None, headers=None):
    import json
    import azure.functions as func

    body = json.dumps(payload).encode() if payload is not None else b""
    return func.HttpRequest(
        method=method,
        url=url,
        headers={"Content-Type": "application/json", **(headers or {})},
        params=params or {},
        route_params=route_params or {},
        body=body,
    )
