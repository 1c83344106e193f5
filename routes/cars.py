import azure.functions as func
import logging

import config
from auth.admin_middleware import require_admin
from services import car_service
from utils.cors import json_response, preflight
from utils.errors import ValidationError, json_errors
from utils.multipart import parse_upload
from utils.pagination import page_params, paginated
from utils.sanitize import route_id
from locales.messages import msg

logger = logging.getLogger(__name__)
bp = func.Blueprint()

CAR_FILE_FIELDS = {"images": config.MAX_CAR_IMAGES}


@bp.function_name(name="Cars")
@bp.route(route="cars", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def cars(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()

    if req.method == "GET":
        page, limit = page_params(req)
        items, total = car_service.list_cars(req.params, page, limit)
        return json_response(paginated(items, total, page, limit))

    # POST
    require_admin(req)
    with parse_upload(req, CAR_FILE_FIELDS) as batch:
        car = car_service.create_car(batch.form, batch.files_for("images"))
    return json_response({"success": True, "data": car}, 201)


@bp.function_name(name="CarItem")
@bp.route(route="cars/{id}", methods=["GET", "PUT", "DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def car_item(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()

    car_id = route_id(req)

    if req.method == "GET":
        return json_response({"success": True, "data": car_service.get_car(car_id)})

    require_admin(req)

    if req.method == "PUT":
        with parse_upload(req, CAR_FILE_FIELDS) as batch:
            car = car_service.update_car(car_id, batch.form, batch.files_for("images"))
        return json_response({"success": True, "data": car})

    # DELETE
    car_service.delete_car(car_id)
    return json_response({"success": True, "message": msg("deleted"), "data": {}})


@bp.function_name(name="CarSimilar")
@bp.route(route="cars/{id}/similar", methods=["GET", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def car_similar(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    items = car_service.similar_cars(route_id(req))
    return json_response({"success": True, "count": len(items), "data": items})


@bp.function_name(name="CarImages")
@bp.route(route="cars/{id}/images", methods=["DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def car_images(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    require_admin(req)
    car_id = route_id(req)
    url = req.params.get("url")
    if not url:
        raise ValidationError("required")
    car = car_service.remove_image(car_id, url)
    return json_response({"success": True, "data": car})
