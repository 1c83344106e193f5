# services/news_service.py
from __future__ import annotations
import logging
import uuid
from datetime import datetime
from typing import List, Mapping, Optional, Tuple

from db import SessionLocal
from models import News
from services.image_association import replace_single
from services.upload_pipeline import discard, stored_uploads
from utils.errors import NotFoundError, ValidationError
from utils.multipart import UploadedFile
from utils.sanitize import bilingual, clean_text

logger = logging.getLogger(__name__)

NEWS_FOLDER = "news"


def serialize_news(n: News) -> dict:
    return {
        "id": str(n.id),
        "title": {"en": n.title_en, "ar": n.title_ar},
        "details": {"en": n.details_en, "ar": n.details_ar},
        "image": n.image,
        "date": n.date.isoformat() if n.date else None,
        "createdAt": n.created_at.isoformat() if n.created_at else None,
    }


def _parse_date(value) -> Optional[datetime]:
    text = clean_text(value)
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("invalidInput")


def _values(form: Mapping, creating: bool) -> dict:
    title, details = bilingual(form, "title"), bilingual(form, "details")
    if creating:
        if not title["en"] or not title["ar"]:
            raise ValidationError("titleRequired")
        if not details["en"] or not details["ar"]:
            raise ValidationError("detailsRequired")
    values = {}
    for prefix, pair in (("title", title), ("details", details)):
        for lang in ("en", "ar"):
            if pair[lang] is not None:
                values[f"{prefix}_{lang}"] = pair[lang]
    date = _parse_date(form.get("date"))
    if date:
        values["date"] = date
    return values


def _get(db, news_id: uuid.UUID) -> News:
    item = db.get(News, news_id)
    if not item:
        raise NotFoundError("newsNotFound", id=news_id)
    return item


def list_news(page: int = 1, limit: int = 10) -> Tuple[List[dict], int]:
    with SessionLocal() as db:
        q = db.query(News)
        total = q.count()
        rows = (
            q.order_by(News.date.desc(), News.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [serialize_news(n) for n in rows], total


def get_news(news_id: uuid.UUID) -> dict:
    with SessionLocal() as db:
        return serialize_news(_get(db, news_id))


def create_news(form: Mapping, image: Optional[UploadedFile] = None) -> dict:
    values = _values(form, creating=True)
    with SessionLocal() as db:
        with stored_uploads([image] if image else [], NEWS_FOLDER) as stored:
            item = News(image=stored[0].url if stored else None, **values)
            db.add(item)
            db.commit()
        db.refresh(item)
        logger.info("created news %s", item.id)
        return serialize_news(item)


def update_news(news_id: uuid.UUID, form: Mapping, image: Optional[UploadedFile] = None) -> dict:
    values = _values(form, creating=False)
    with SessionLocal() as db:
        item = _get(db, news_id)
        with stored_uploads([image] if image else [], NEWS_FOLDER) as stored:
            new_image, removed = replace_single(item.image, stored[0].url if stored else None)
            for key, value in values.items():
                setattr(item, key, value)
            item.image = new_image
            db.commit()
        discard(removed)
        db.refresh(item)
        return serialize_news(item)


def delete_news(news_id: uuid.UUID) -> None:
    with SessionLocal() as db:
        item = _get(db, news_id)
        image = item.image
        db.delete(item)
        db.commit()
    discard([image] if image else [])
    logger.info("deleted news %s", news_id)
