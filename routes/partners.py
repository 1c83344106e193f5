import azure.functions as func
import logging

from auth.admin_middleware import require_admin
from services import partner_service
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.multipart import parse_upload
from utils.pagination import page_params, paginated
from utils.sanitize import route_id
from locales.messages import msg

logger = logging.getLogger(__name__)
bp = func.Blueprint()

IMAGE_FIELD = {"image": 1}


@bp.function_name(name="Partners")
@bp.route(route="partners", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def partners(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        page, limit = page_params(req)
        items, total = partner_service.list_partners(page, limit)
        return json_response(paginated(items, total, page, limit))

    require_admin(req)
    with parse_upload(req, IMAGE_FIELD) as batch:
        partner = partner_service.create_partner(batch.form, batch.first("image"))
    return json_response({"success": True, "data": partner}, 201)


@bp.function_name(name="PartnerItem")
@bp.route(route="partners/{id}", methods=["GET", "PUT", "DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def partner_item(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    partner_id = route_id(req)
    if req.method == "GET":
        return json_response({"success": True, "data": partner_service.get_partner(partner_id)})

    require_admin(req)
    if req.method == "PUT":
        with parse_upload(req, IMAGE_FIELD) as batch:
            partner = partner_service.update_partner(partner_id, batch.form, batch.first("image"))
        return json_response({"success": True, "data": partner})

    partner_service.delete_partner(partner_id)
    return json_response({"success": True, "message": msg("deleted"), "data": {}})
