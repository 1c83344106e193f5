import azure.functions as func
import logging

from auth.admin_middleware import require_admin
from services import offer_service
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.multipart import parse_upload
from utils.sanitize import parse_bool, route_id
from locales.messages import msg

logger = logging.getLogger(__name__)
bp = func.Blueprint()

IMAGE_FIELD = {"image": 1}


@bp.function_name(name="SeasonalOffers")
@bp.route(route="seasonal-offers", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def seasonal_offers(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        items = offer_service.list_offers(parse_bool(req.params.get("show")))
        return json_response({"success": True, "count": len(items), "data": items})

    require_admin(req)
    with parse_upload(req, IMAGE_FIELD) as batch:
        offer = offer_service.create_offer(batch.form, batch.first("image"))
    return json_response({"success": True, "data": offer}, 201)


@bp.function_name(name="SeasonalOfferItem")
@bp.route(route="seasonal-offers/{id}", methods=["GET", "PUT", "DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def seasonal_offer_item(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    offer_id = route_id(req)
    if req.method == "GET":
        return json_response({"success": True, "data": offer_service.get_offer(offer_id)})

    require_admin(req)
    if req.method == "PUT":
        with parse_upload(req, IMAGE_FIELD) as batch:
            offer = offer_service.update_offer(offer_id, batch.form, batch.first("image"))
        return json_response({"success": True, "data": offer})

    offer_service.delete_offer(offer_id)
    return json_response({"success": True, "message": msg("offerDeleted"), "data": {}})
