# services/partner_service.py
from __future__ import annotations
import uuid
from typing import List, Mapping, Optional, Tuple

from db import SessionLocal
from models import Partner
from services.image_association import replace_single
from services.upload_pipeline import discard, stored_uploads
from utils.errors import NotFoundError, ValidationError
from utils.multipart import UploadedFile
from utils.sanitize import clean_text

PARTNER_FOLDER = "partners"


def serialize_partner(p: Partner) -> dict:
    return {"id": str(p.id), "name": p.name, "url": p.url, "image": p.image}


def _get(db, partner_id: uuid.UUID) -> Partner:
    partner = db.get(Partner, partner_id)
    if not partner:
        raise NotFoundError()
    return partner


def list_partners(page: int = 1, limit: int = 10) -> Tuple[List[dict], int]:
    with SessionLocal() as db:
        q = db.query(Partner)
        total = q.count()
        rows = q.order_by(Partner.name).offset((page - 1) * limit).limit(limit).all()
        return [serialize_partner(p) for p in rows], total


def get_partner(partner_id: uuid.UUID) -> dict:
    with SessionLocal() as db:
        return serialize_partner(_get(db, partner_id))


def create_partner(form: Mapping, image: Optional[UploadedFile] = None) -> dict:
    name, url = clean_text(form.get("name")), clean_text(form.get("url"))
    if not name or not url:
        raise ValidationError("requiredFieldsMissing", fields="name, url")
    if image is None:
        raise ValidationError("imageRequired")
    with SessionLocal() as db:
        with stored_uploads([image], PARTNER_FOLDER) as stored:
            partner = Partner(name=name, url=url, image=stored[0].url)
            db.add(partner)
            db.commit()
        db.refresh(partner)
        return serialize_partner(partner)


def update_partner(partner_id: uuid.UUID, form: Mapping, image: Optional[UploadedFile] = None) -> dict:
    name, url = clean_text(form.get("name")), clean_text(form.get("url"))
    with SessionLocal() as db:
        partner = _get(db, partner_id)
        with stored_uploads([image] if image else [], PARTNER_FOLDER) as stored:
            new_image, removed = replace_single(partner.image, stored[0].url if stored else None)
            if name:
                partner.name = name
            if url:
                partner.url = url
            partner.image = new_image
            db.commit()
        discard(removed)
        db.refresh(partner)
        return serialize_partner(partner)


def delete_partner(partner_id: uuid.UUID) -> None:
    with SessionLocal() as db:
        partner = _get(db, partner_id)
        image = partner.image
        db.delete(partner)
        db.commit()
    discard([image] if image else [])
