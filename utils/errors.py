# utils/errors.py
"""
Error types shared by services and routes.

Services raise these; routes never build error bodies themselves. The `json_errors`
decorator turns whatever escapes a handler into the bilingual error body:
    {"success": false, "message": {"en": ..., "ar": ...}}
"""
import json
import logging
from functools import wraps
from typing import Callable, Dict, Union

import azure.functions as func
from sqlalchemy.exc import IntegrityError

from locales.messages import msg
from utils.cors import cors_response

logger = logging.getLogger(__name__)

Message = Union[str, Dict[str, str]]


class AppError(Exception):
    """Base error carrying an HTTP status and a bilingual message."""
    status = 500
    message_key = "serverError"

    def __init__(self, message: Message = None, status: int = None, **params):
        if message is None:
            message = msg(self.message_key, **params)
        elif isinstance(message, str):
            message = msg(message, **params)
        self.message = message
        if status is not None:
            self.status = status
        super().__init__(message.get("en"))


class ValidationError(AppError):
    status = 400
    message_key = "invalidInput"


class UnsupportedMediaTypeError(ValidationError):
    message_key = "imageOnly"


class PayloadTooLargeError(ValidationError):
    message_key = "imageTooLarge"


class DecodeError(ValidationError):
    message_key = "imageDecodeFailed"


class ImageTooLargeError(ValidationError):
    message_key = "imageTooLarge"


class UnauthorizedError(AppError):
    status = 401
    message_key = "unauthorized"


class NotFoundError(AppError):
    status = 404
    message_key = "notFound"


class StorageWriteError(AppError):
    message_key = "storageWriteFailed"


class StorageDeleteError(AppError):
    """Raised by storage backends internally; `delete()` never lets it escape."""
    message_key = "serverError"


class InvariantViolationError(AppError):
    message_key = "imageStateInvalid"


def error_response(exc: AppError) -> func.HttpResponse:
    return cors_response(
        json.dumps({"success": False, "message": exc.message}, ensure_ascii=False),
        exc.status,
        "application/json",
    )


def json_errors(f: Callable) -> Callable:
    """
    Decorator for HTTP handlers: maps AppError to its status, unique-constraint
    violations to 400 and everything else to a logged 500.
    """
    @wraps(f)
    def decorated_function(req: func.HttpRequest) -> func.HttpResponse:
        try:
            return f(req)
        except AppError as e:
            if e.status >= 500:
                logger.exception("%s failed", f.__name__)
            else:
                logger.info("%s rejected: %s", f.__name__, e)
            return error_response(e)
        except IntegrityError:
            logger.warning("%s hit a unique constraint", f.__name__, exc_info=True)
            return error_response(ValidationError("duplicate_key", field="value"))
        except Exception:
            logger.exception("%s: unhandled", f.__name__)
            return error_response(AppError())

    return decorated_function
