import azure.functions as func
import logging

from auth.admin_middleware import admin_required
from services import admin_service
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.sanitize import json_body, route_id
from locales.messages import msg

logger = logging.getLogger(__name__)
bp = func.Blueprint()


@bp.function_name(name="Admins")
@bp.route(route="admins", methods=["GET", "POST", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
@admin_required
def admins(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        items = admin_service.list_admins()
        return json_response({"success": True, "count": len(items), "data": items})
    admin = admin_service.create_admin(json_body(req))
    return json_response({"success": True, "data": admin}, 201)


@bp.function_name(name="AdminItem")
@bp.route(route="admins/{id}", methods=["GET", "PUT", "DELETE", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
@admin_required
def admin_item(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    admin_id = route_id(req)
    if req.method == "GET":
        return json_response({"success": True, "data": admin_service.get_admin(admin_id)})
    if req.method == "PUT":
        return json_response({"success": True, "data": admin_service.update_admin(admin_id, json_body(req))})
    admin_service.delete_admin(admin_id)
    return json_response({"success": True, "message": msg("deleted"), "data": {}})
