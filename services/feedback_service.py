# services/feedback_service.py
from __future__ import annotations
import logging
import uuid
from typing import List, Mapping, Tuple

from db import SessionLocal
from models import Feedback
from utils.errors import NotFoundError, ValidationError
from utils.sanitize import clean_text, is_valid_email

logger = logging.getLogger(__name__)


def serialize_feedback(f: Feedback) -> dict:
    return {
        "id": str(f.id),
        "fullName": f.full_name,
        "mobileNumber": f.mobile_number,
        "email": f.email,
        "message": f.message,
        "createdAt": f.created_at.isoformat() if f.created_at else None,
    }


def _get(db, feedback_id: uuid.UUID) -> Feedback:
    item = db.get(Feedback, feedback_id)
    if not item:
        raise NotFoundError()
    return item


def submit_feedback(data: Mapping) -> dict:
    full_name = clean_text(data.get("fullName"))
    mobile = clean_text(data.get("mobileNumber"))
    email = clean_text(data.get("email"))
    message = clean_text(data.get("message"))
    if not full_name:
        raise ValidationError("nameRequired")
    if not mobile:
        raise ValidationError("mobileRequired")
    if not email:
        raise ValidationError("emailRequired")
    if not is_valid_email(email):
        raise ValidationError("invalidEmail")
    if not message:
        raise ValidationError("messageRequired")

    with SessionLocal() as db:
        item = Feedback(full_name=full_name, mobile_number=mobile, email=email, message=message)
        db.add(item)
        db.commit()
        db.refresh(item)
        logger.info("feedback %s received", item.id)
        return serialize_feedback(item)


def list_feedback(page: int = 1, limit: int = 10) -> Tuple[List[dict], int]:
    with SessionLocal() as db:
        q = db.query(Feedback)
        total = q.count()
        rows = (
            q.order_by(Feedback.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [serialize_feedback(f) for f in rows], total


def get_feedback(feedback_id: uuid.UUID) -> dict:
    with SessionLocal() as db:
        return serialize_feedback(_get(db, feedback_id))


def delete_feedback(feedback_id: uuid.UUID) -> None:
    with SessionLocal() as db:
        db.delete(_get(db, feedback_id))
        db.commit()
