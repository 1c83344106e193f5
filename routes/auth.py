import azure.functions as func
import logging

from auth.admin_middleware import require_admin
from services import admin_service
from services.admin_service import serialize_admin
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.sanitize import json_body
from locales.messages import msg

logger = logging.getLogger(__name__)
bp = func.Blueprint()


@bp.function_name(name="Login")
@bp.route(route="auth/login", methods=["POST", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def login(req: func.HttpRequest) -> func.HttpResponse:
    """
    Exchange admin email and password for a bearer token.

    Returns:
        200 {"success": true, "token": "<jwt>"}
        400 when email or password is missing, 401 on bad credentials
    """
    if req.method == "OPTIONS":
        return preflight()
    data = json_body(req)
    token = admin_service.login(data.get("email"), data.get("password"))
    return json_response({"success": True, "token": token})


@bp.function_name(name="Me")
@bp.route(route="auth/me", methods=["GET", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def me(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    admin = require_admin(req)
    return json_response({"success": True, "data": serialize_admin(admin)})


@bp.function_name(name="Logout")
@bp.route(route="auth/logout", methods=["GET", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def logout(req: func.HttpRequest) -> func.HttpResponse:
    # tokens are stateless; the client drops its copy
    if req.method == "OPTIONS":
        return preflight()
    return json_response({"success": True, "message": msg("loggedOut"), "data": {}})
