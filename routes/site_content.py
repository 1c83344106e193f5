import azure.functions as func
import logging

from auth.admin_middleware import require_admin
from models import HOME_IMAGE_SLOTS
from services import site_content_service as content
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.multipart import parse_upload
from utils.sanitize import json_body
from locales.messages import msg

logger = logging.getLogger(__name__)
bp = func.Blueprint()

HOME_FILE_FIELDS = {slot: 1 for slot in HOME_IMAGE_SLOTS}


@bp.function_name(name="HomePageImages")
@bp.route(route="home-page-images", methods=["GET", "PUT", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def home_page_images(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        return json_response({"success": True, "data": content.get_home_images()})

    require_admin(req)
    with parse_upload(req, HOME_FILE_FIELDS) as batch:
        data = content.update_home_images(batch.all_files())
    return json_response({"success": True, "message": msg("updated"), "data": data})


@bp.function_name(name="Social")
@bp.route(route="social", methods=["GET", "PUT", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def social(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        return json_response({"success": True, "data": content.get_social()})
    require_admin(req)
    data = content.update_social(json_body(req))
    return json_response({"success": True, "message": msg("socialUpdated"), "data": data})


@bp.function_name(name="Terms")
@bp.route(route="terms", methods=["GET", "PUT", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def terms(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        return json_response({"success": True, "data": content.get_terms()})
    require_admin(req)
    data = content.update_terms(json_body(req))
    return json_response({"success": True, "message": msg("contentUpdated"), "data": data})


@bp.function_name(name="WhatWeDo")
@bp.route(route="what-we-do", methods=["GET", "PUT", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def what_we_do(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        return json_response({"success": True, "data": content.get_what_we_do()})
    require_admin(req)
    data = content.update_what_we_do(json_body(req))
    return json_response({"success": True, "message": msg("contentUpdated"), "data": data})
