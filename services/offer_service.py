# services/offer_service.py
from __future__ import annotations
import logging
import uuid
from typing import List, Mapping, Optional

from db import SessionLocal
from models import SeasonalOffer
from services.image_association import replace_single
from services.upload_pipeline import discard, stored_uploads
from utils.errors import NotFoundError, ValidationError
from utils.multipart import UploadedFile
from utils.sanitize import bilingual, parse_bool

logger = logging.getLogger(__name__)

OFFER_FOLDER = "offers"


def serialize_offer(o: SeasonalOffer) -> dict:
    return {
        "id": str(o.id),
        "title": {"en": o.title_en, "ar": o.title_ar},
        "details": {"en": o.details_en, "ar": o.details_ar},
        "show": o.show,
        "image": o.image,
        "createdAt": o.created_at.isoformat() if o.created_at else None,
    }


def _values(form: Mapping, creating: bool) -> dict:
    title, details = bilingual(form, "title"), bilingual(form, "details")
    if creating and not (title["en"] and title["ar"] and details["en"] and details["ar"]):
        raise ValidationError("requiredFieldsMissing", fields="title, details")
    values = {}
    for prefix, pair in (("title", title), ("details", details)):
        for lang in ("en", "ar"):
            if pair[lang] is not None:
                values[f"{prefix}_{lang}"] = pair[lang]
    show = parse_bool(form.get("show"), True if creating else None)
    if show is not None:
        values["show"] = show
    return values


def _get(db, offer_id: uuid.UUID) -> SeasonalOffer:
    offer = db.get(SeasonalOffer, offer_id)
    if not offer:
        raise NotFoundError("offerNotFound", id=offer_id)
    return offer


def list_offers(show: Optional[bool] = None) -> List[dict]:
    with SessionLocal() as db:
        q = db.query(SeasonalOffer)
        if show is not None:
            q = q.filter(SeasonalOffer.show == show)
        return [serialize_offer(o) for o in q.order_by(SeasonalOffer.created_at.desc()).all()]


def get_offer(offer_id: uuid.UUID) -> dict:
    with SessionLocal() as db:
        return serialize_offer(_get(db, offer_id))


def create_offer(form: Mapping, image: Optional[UploadedFile] = None) -> dict:
    values = _values(form, creating=True)
    with SessionLocal() as db:
        with stored_uploads([image] if image else [], OFFER_FOLDER) as stored:
            offer = SeasonalOffer(image=stored[0].url if stored else None, **values)
            db.add(offer)
            db.commit()
        db.refresh(offer)
        logger.info("created seasonal offer %s", offer.id)
        return serialize_offer(offer)


def update_offer(offer_id: uuid.UUID, form: Mapping, image: Optional[UploadedFile] = None) -> dict:
    values = _values(form, creating=False)
    with SessionLocal() as db:
        offer = _get(db, offer_id)
        with stored_uploads([image] if image else [], OFFER_FOLDER) as stored:
            new_image, removed = replace_single(offer.image, stored[0].url if stored else None)
            for key, value in values.items():
                setattr(offer, key, value)
            offer.image = new_image
            db.commit()
        discard(removed)
        db.refresh(offer)
        return serialize_offer(offer)


def delete_offer(offer_id: uuid.UUID) -> None:
    with SessionLocal() as db:
        offer = _get(db, offer_id)
        image = offer.image
        db.delete(offer)
        db.commit()
    discard([image] if image else [])
