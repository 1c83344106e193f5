from functools import wraps
from typing import Callable
import azure.functions as func

from auth.deps import bearer_token, get_current_admin
from models import Admin
from utils.errors import UnauthorizedError


def require_admin(req: func.HttpRequest) -> Admin:
    """Resolve the calling admin or raise 401."""
    token = bearer_token(req)
    if not token:
        raise UnauthorizedError()
    admin = get_current_admin(token)
    if not admin:
        raise UnauthorizedError("invalid_token")
    return admin


def admin_required(f: Callable) -> Callable:
    """
    Decorator that requires a signed-in admin. Place it under `json_errors` so the
    401 is rendered as the usual error body.
    """
    @wraps(f)
    def decorated_function(req: func.HttpRequest) -> func.HttpResponse:
        if req.method == "OPTIONS":
            return f(req)
        require_admin(req)
        return f(req)

    return decorated_function
