# services/make_service.py
from __future__ import annotations
import logging
import uuid
from typing import List, Mapping, Optional

from sqlalchemy import func

from db import SessionLocal
from models import Car, Make
from utils.errors import NotFoundError, ValidationError
from utils.sanitize import bilingual, clean_text

logger = logging.getLogger(__name__)


def serialize_make_ref(m: Make) -> dict:
    return {"id": str(m.id), "name": {"en": m.name_en, "ar": m.name_ar}}


def serialize_make(m: Make) -> dict:
    return {
        **serialize_make_ref(m),
        "models": list(m.models or []),
        "createdAt": m.created_at.isoformat() if m.created_at else None,
    }


def _parse_models(raw) -> Optional[List[dict]]:
    """Accept [{en, ar}] or plain strings; drop entries without an English name."""
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValidationError("invalidInput")
    models = []
    for item in raw:
        if isinstance(item, Mapping):
            en, ar = clean_text(item.get("en")), clean_text(item.get("ar"))
        else:
            en = ar = clean_text(item)
        if en:
            models.append({"en": en, "ar": ar or en})
    return models


def _ensure_unique_name(db, name_en: str, exclude_id: Optional[uuid.UUID] = None) -> None:
    q = db.query(Make.id).filter(func.lower(Make.name_en) == name_en.lower())
    if exclude_id:
        q = q.filter(Make.id != exclude_id)
    if q.first():
        raise ValidationError("duplicate_key", field="name")


def _get(db, make_id: uuid.UUID) -> Make:
    make = db.get(Make, make_id)
    if not make:
        raise NotFoundError()
    return make


def list_makes() -> List[dict]:
    with SessionLocal() as db:
        return [serialize_make(m) for m in db.query(Make).order_by(Make.name_en).all()]


def get_make(make_id: uuid.UUID) -> dict:
    with SessionLocal() as db:
        return serialize_make(_get(db, make_id))


def create_make(data: Mapping) -> dict:
    name = bilingual(data, "name")
    if not name["en"] or not name["ar"]:
        raise ValidationError("requiredFieldsMissing", fields="name.en, name.ar")
    models = _parse_models(data.get("models")) or []
    with SessionLocal() as db:
        _ensure_unique_name(db, name["en"])
        make = Make(name_en=name["en"], name_ar=name["ar"], models=models)
        db.add(make)
        db.commit()
        db.refresh(make)
        logger.info("created make %s", make.name_en)
        return serialize_make(make)


def update_make(make_id: uuid.UUID, data: Mapping) -> dict:
    name = bilingual(data, "name")
    models = _parse_models(data.get("models"))
    with SessionLocal() as db:
        make = _get(db, make_id)
        if name["en"]:
            _ensure_unique_name(db, name["en"], exclude_id=make.id)
            make.name_en = name["en"]
        if name["ar"]:
            make.name_ar = name["ar"]
        if models is not None:
            make.models = models
        db.commit()
        db.refresh(make)
        return serialize_make(make)


def delete_make(make_id: uuid.UUID) -> None:
    with SessionLocal() as db:
        make = _get(db, make_id)
        in_use = db.query(func.count(Car.id)).filter(Car.make_id == make.id).scalar()
        if in_use:
            raise ValidationError("makeInUse", count=in_use)
        db.delete(make)
        db.commit()
        logger.info("deleted make %s", make_id)
