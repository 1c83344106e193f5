import azure.functions as func

from auth.admin_middleware import admin_required, require_admin
from services import feedback_service
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.pagination import page_params, paginated
from utils.sanitize import json_body, route_id
from locales.messages import msg

bp = func.Blueprint()


@bp.function_name(name="Feedback")
@bp.route(route="feedback", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def feedback(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "POST":
        # public contact form
        item = feedback_service.submit_feedback(json_body(req))
        return json_response({"success": True, "data": item}, 201)

    require_admin(req)
    page, limit = page_params(req)
    items, total = feedback_service.list_feedback(page, limit)
    return json_response(paginated(items, total, page, limit))


@bp.function_name(name="FeedbackItem")
@bp.route(route="feedback/{id}", methods=["GET", "DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
@admin_required
def feedback_item(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    feedback_id = route_id(req)
    if req.method == "GET":
        return json_response({"success": True, "data": feedback_service.get_feedback(feedback_id)})
    feedback_service.delete_feedback(feedback_id)
    return json_response({"success": True, "message": msg("deleted"), "data": {}})
