import azure.functions as func
import logging
import mimetypes

from services.storage_service import LocalDiskStorage, get_storage
from utils.cors import cors_response
from utils.errors import NotFoundError, json_errors

logger = logging.getLogger(__name__)
bp = func.Blueprint()


@bp.function_name(name="Uploads")
@bp.route(route="uploads/{*path}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def uploads(req: func.HttpRequest) -> func.HttpResponse:
    """Serve files written by the local storage backend."""
    storage = get_storage()
    path = req.route_params.get("path") or ""
    if not isinstance(storage, LocalDiskStorage) or not path:
        raise NotFoundError()
    data = storage.read(f"{storage.url_prefix}/{path}")
    mime, _ = mimetypes.guess_type(path)
    resp = cors_response(data, 200, mime or "application/octet-stream")
    resp.headers["Cache-Control"] = "public, max-age=86400"
    return resp
