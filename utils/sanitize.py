# utils/sanitize.py
"""Coercion helpers for form/JSON fields (multipart forms deliver everything as text)."""
import math
import re
import uuid
from typing import Any, Mapping, Optional

from utils.errors import ValidationError

_EMAIL_RE = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,})+$")


def clean_text(value: Any) -> Optional[str]:
    """
    Strip leading/trailing whitespace; empty strings become None.
    """
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_bool(value: Any, default: Optional[bool] = None) -> Optional[bool]:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def parse_int(value: Any, field: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("invalidNumber", field=field)


def parse_float(value: Any, field: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError("invalidNumber", field=field)
    if not math.isfinite(number):
        raise ValidationError("invalidNumber", field=field)
    return number


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """Return a UUID or None when `value` is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def route_id(req, name: str = "id") -> uuid.UUID:
    raw = req.route_params.get(name)
    parsed = parse_uuid(raw)
    if parsed is None:
        raise ValidationError("invalid_id", id=raw)
    return parsed


def bilingual(data: Mapping, field: str) -> dict:
    """
    Read a bilingual field from either `{field: {en, ar}}` (JSON bodies) or
    `field_en` / `field_ar` (multipart forms). Missing languages are None.
    """
    nested = data.get(field)
    if isinstance(nested, Mapping):
        return {"en": clean_text(nested.get("en")), "ar": clean_text(nested.get("ar"))}
    return {"en": clean_text(data.get(f"{field}_en")), "ar": clean_text(data.get(f"{field}_ar"))}


def is_valid_email(value: Optional[str]) -> bool:
    return bool(value) and bool(_EMAIL_RE.match(value))


def json_body(req) -> dict:
    """Request body as a JSON object; an empty body is an empty dict."""
    if not (req.get_body() or b"").strip():
        return {}
    try:
        data = req.get_json()
    except ValueError:
        raise ValidationError("invalidBody")
    if not isinstance(data, dict):
        raise ValidationError("invalidBody")
    return data
