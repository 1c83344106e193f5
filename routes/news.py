import azure.functions as func
import logging

from auth.admin_middleware import require_admin
from services import news_service
from utils.cors import json_response, preflight
from utils.errors import json_errors
from utils.multipart import parse_upload
from utils.pagination import page_params, paginated
from utils.sanitize import route_id
from locales.messages import msg

logger = logging.getLogger(__name__)
bp = func.Blueprint()

IMAGE_FIELD = {"image": 1}


@bp.function_name(name="News")
@bp.route(route="news", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def news(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    if req.method == "GET":
        page, limit = page_params(req)
        items, total = news_service.list_news(page, limit)
        return json_response(paginated(items, total, page, limit))

    require_admin(req)
    with parse_upload(req, IMAGE_FIELD) as batch:
        item = news_service.create_news(batch.form, batch.first("image"))
    return json_response({"success": True, "data": item}, 201)


@bp.function_name(name="NewsItem")
@bp.route(route="news/{id}", methods=["GET", "PUT", "DELETE", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
@json_errors
def news_item(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return preflight()
    news_id = route_id(req)
    if req.method == "GET":
        return json_response({"success": True, "data": news_service.get_news(news_id)})

    require_admin(req)
    if req.method == "PUT":
        with parse_upload(req, IMAGE_FIELD) as batch:
            item = news_service.update_news(news_id, batch.form, batch.first("image"))
        return json_response({"success": True, "data": item})

    news_service.delete_news(news_id)
    return json_response({"success": True, "message": msg("newsDeleted"), "data": {}})
