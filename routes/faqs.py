import azure.functions as func

from auth.admin_middleware import require_admin
from services import faq_service
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.sanitize import json_body, route_id
from locales.messages import msg

bp = func.Blueprint()


@bp.function_name(name="Faqs")
@bp.route(route="faqs", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def faqs(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        items = faq_service.list_faqs()
        return json_response({"success": True, "count": len(items), "data": items})
    require_admin(req)
    return json_response({"success": True, "data": faq_service.create_faq(json_body(req))}, 201)


@bp.function_name(name="FaqItem")
@bp.route(route="faqs/{id}", methods=["GET", "PUT", "DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def faq_item(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    faq_id = route_id(req)
    if req.method == "GET":
        return json_response({"success": True, "data": faq_service.get_faq(faq_id)})
    require_admin(req)
    if req.method == "PUT":
        return json_response({"success": True, "data": faq_service.update_faq(faq_id, json_body(req))})
    faq_service.delete_faq(faq_id)
    return json_response({"success": True, "message": msg("deleted"), "data": {}})
