import azure.functions as func
import logging

from auth.admin_middleware import require_admin
from services import make_service
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.sanitize import json_body, route_id
from locales.messages import msg

logger = logging.getLogger(__name__)
bp = func.Blueprint()


@bp.function_name(name="Makes")
@bp.route(route="makes", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def makes(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        items = make_service.list_makes()
        return json_response({"success": True, "count": len(items), "data": items})
    require_admin(req)
    return json_response({"success": True, "data": make_service.create_make(json_body(req))}, 201)


@bp.function_name(name="MakeItem")
@bp.route(route="makes/{id}", methods=["GET", "PUT", "DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def make_item(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    make_id = route_id(req)
    if req.method == "GET":
        return json_response({"success": True, "data": make_service.get_make(make_id)})
    require_admin(req)
    if req.method == "PUT":
        return json_response({"success": True, "data": make_service.update_make(make_id, json_body(req))})
    make_service.delete_make(make_id)
    return json_response({"success": True, "message": msg("deleted"), "data": {}})
