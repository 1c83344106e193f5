# services/faq_service.py
from __future__ import annotations
import uuid
from typing import List, Mapping

from db import SessionLocal
from models import FAQ
from utils.errors import NotFoundError, ValidationError
from utils.sanitize import bilingual


def serialize_faq(f: FAQ) -> dict:
    return {
        "id": str(f.id),
        "question": {"en": f.question_en, "ar": f.question_ar},
        "answer": {"en": f.answer_en, "ar": f.answer_ar},
    }


def _get(db, faq_id: uuid.UUID) -> FAQ:
    faq = db.get(FAQ, faq_id)
    if not faq:
        raise NotFoundError()
    return faq


def list_faqs() -> List[dict]:
    with SessionLocal() as db:
        return [serialize_faq(f) for f in db.query(FAQ).order_by(FAQ.created_at).all()]


def get_faq(faq_id: uuid.UUID) -> dict:
    with SessionLocal() as db:
        return serialize_faq(_get(db, faq_id))


def create_faq(data: Mapping) -> dict:
    q, a = bilingual(data, "question"), bilingual(data, "answer")
    if not all((q["en"], q["ar"], a["en"], a["ar"])):
        raise ValidationError("faqRequired")
    with SessionLocal() as db:
        faq = FAQ(question_en=q["en"], question_ar=q["ar"], answer_en=a["en"], answer_ar=a["ar"])
        db.add(faq)
        db.commit()
        db.refresh(faq)
        return serialize_faq(faq)


def update_faq(faq_id: uuid.UUID, data: Mapping) -> dict:
    q, a = bilingual(data, "question"), bilingual(data, "answer")
    with SessionLocal() as db:
        faq = _get(db, faq_id)
        for prefix, pair in (("question", q), ("answer", a)):
            for lang in ("en", "ar"):
                if pair[lang]:
                    setattr(faq, f"{prefix}_{lang}", pair[lang])
        db.commit()
        db.refresh(faq)
        return serialize_faq(faq)


def delete_faq(faq_id: uuid.UUID) -> None:
    with SessionLocal() as db:
        db.delete(_get(db, faq_id))
        db.commit()
