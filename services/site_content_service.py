# services/site_content_service.py
"""
Site-wide singleton content: home page images, social links, terms and "what we do".

Each singleton row lives at id=SINGLETON_ID and is created on first read with
`INSERT ... ON CONFLICT DO NOTHING`, so two workers racing on an empty table still
end up with one row.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Mapping, Sequence

from sqlalchemy.dialects import postgresql, sqlite

from db import SessionLocal
from models import HomePageImages, SocialLinks, TermsAndConditions, WhatWeDo, SINGLETON_ID
from services.image_association import replace_slots
from services.upload_pipeline import discard, stored_uploads
from utils.errors import ValidationError
from utils.multipart import UploadedFile
from utils.sanitize import bilingual, clean_text, parse_int

logger = logging.getLogger(__name__)

HOME_FOLDER = "home"

DEFAULT_HOME_IMAGES = {
    "what_we_do": "/uploads/home/whatwedo.jpg",
    "brands": "/uploads/home/brands.jpg",
    "news": "/uploads/home/news.jpg",
    "showroom": "/uploads/home/showroom.jpg",
    "feedback": "/uploads/home/feedback.jpg",
    "terms": "/uploads/home/terms.jpg",
}

DEFAULT_SOCIAL = {
    "mobile": "065343353",
    "insta": "https://www.instagram.com/alweamcars",
    "tiktok": "https://www.tiktok.com/@alweamcars",
    "youtube": "ALWEAMCARS - YouTube",
    "snapchat": "https://www.snapchat.com/add/alweamcars",
    "location": "SHARJAH - RED PLOT- LAND313/A-ALWEAM CENTER-SHOWROOM NO 4",
    "location_link": "https://maps.app.goo.gl/G5FEZoaa9pFBVvNy8",
    "email": None,
    "whatsapp": None,
    "sales_numbers": ["0508538666", "0555584722", "0508295755", "0509275502", "0506988047"],
}

DEFAULT_TERMS = [
    {
        "title": {"en": "Introduction to Terms", "ar": "مقدمة في الشروط"},
        "details": {
            "en": "These terms govern the use of our services.",
            "ar": "تحكم هذه الشروط استخدام خدماتنا.",
        },
        "order": 1,
    },
    {
        "title": {"en": "User Responsibilities", "ar": "مسؤوليات المستخدم"},
        "details": {
            "en": "Users must comply with all rules and policies.",
            "ar": "يجب على المستخدمين الامتثال لجميع القواعد والسياسات.",
        },
        "order": 2,
    },
    {
        "title": {"en": "Privacy Policy", "ar": "سياسة الخصوصية"},
        "details": {
            "en": "We value your privacy and protect your data.",
            "ar": "نحن نقدر خصوصيتك ونحمي بياناتك.",
        },
        "order": 3,
    },
]

DEFAULT_WHAT_WE_DO = {
    "content_en": "Default what we do content",
    "content_ar": "محتوى افتراضي لما نقوم به",
}

# request key -> column
SOCIAL_FIELDS = {
    "mobile": "mobile",
    "insta": "insta",
    "tiktok": "tiktok",
    "youtube": "youtube",
    "snapchat": "snapchat",
    "location": "location",
    "locationLink": "location_link",
    "email": "email",
    "whatsapp": "whatsapp",
}


# ────────────────────────────────────────────────────────────
# Singleton upsert
# ────────────────────────────────────────────────────────────
def _dialect_insert(db):
    name = db.get_bind().dialect.name
    if name == "postgresql":
        return postgresql.insert
    if name == "sqlite":
        return sqlite.insert
    raise RuntimeError(f"singleton upsert not supported on {name}")


def get_or_create_singleton(db, model, defaults: Mapping):
    row = db.get(model, SINGLETON_ID)
    if row is not None:
        return row
    insert = _dialect_insert(db)
    db.execute(
        insert(model.__table__)
        .values(id=SINGLETON_ID, **defaults)
        .on_conflict_do_nothing(index_elements=["id"])
    )
    db.commit()
    logger.info("initialized %s with defaults", model.__tablename__)
    return db.get(model, SINGLETON_ID)


# ────────────────────────────────────────────────────────────
# Home page images
# ────────────────────────────────────────────────────────────
def serialize_home_images(row: HomePageImages) -> dict:
    return {slot: getattr(row, column) for slot, column in HomePageImages.SLOT_COLUMNS.items()}


def get_home_images() -> dict:
    with SessionLocal() as db:
        return serialize_home_images(get_or_create_singleton(db, HomePageImages, DEFAULT_HOME_IMAGES))


def update_home_images(files: Sequence[UploadedFile]) -> dict:
    """Each uploaded slot replaces only that slot; the previous file is deleted after commit."""
    seen = set()
    for upload in files:
        if upload.field_name not in HomePageImages.SLOT_COLUMNS:
            raise ValidationError("unexpectedField", field=upload.field_name)
        # one file per slot, otherwise the extra stored file would have no owner
        if upload.field_name in seen:
            raise ValidationError("tooManyFiles", field=upload.field_name, max=1)
        seen.add(upload.field_name)

    with SessionLocal() as db:
        row = get_or_create_singleton(db, HomePageImages, DEFAULT_HOME_IMAGES)
        with stored_uploads(files, HOME_FOLDER) as stored:
            current = serialize_home_images(row)
            updated, removed = replace_slots(current, {s.field_name: s.url for s in stored})
            for slot, url in updated.items():
                setattr(row, HomePageImages.SLOT_COLUMNS[slot], url)
            db.commit()
        placeholders = set(DEFAULT_HOME_IMAGES.values())
        discard([url for url in removed if url not in placeholders])
        db.refresh(row)
        logger.info("home page images updated: %s", ", ".join(s.field_name for s in stored) or "none")
        return serialize_home_images(row)


# ────────────────────────────────────────────────────────────
# Social links
# ────────────────────────────────────────────────────────────
def serialize_social(row: SocialLinks) -> dict:
    out = {key: getattr(row, column) for key, column in SOCIAL_FIELDS.items()}
    out["salesNumbers"] = list(row.sales_numbers or [])
    return out


def _parse_sales_numbers(raw) -> List[str]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, list):
        raise ValidationError("invalidInput")
    return [n for n in (clean_text(item) for item in raw) if n]


def get_social() -> dict:
    with SessionLocal() as db:
        return serialize_social(get_or_create_singleton(db, SocialLinks, DEFAULT_SOCIAL))


def update_social(data: Mapping) -> dict:
    with SessionLocal() as db:
        row = get_or_create_singleton(db, SocialLinks, DEFAULT_SOCIAL)
        for key, column in SOCIAL_FIELDS.items():
            if key in data:
                setattr(row, column, clean_text(data.get(key)))
        if "salesNumbers" in data:
            row.sales_numbers = _parse_sales_numbers(data.get("salesNumbers"))
        db.commit()
        db.refresh(row)
        return serialize_social(row)


# ────────────────────────────────────────────────────────────
# Terms and conditions
# ────────────────────────────────────────────────────────────
def _parse_terms(raw) -> List[Dict]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("contentRequired")
    sections = []
    for index, item in enumerate(raw, start=1):
        if not isinstance(item, Mapping):
            raise ValidationError("invalidInput")
        title, details = bilingual(item, "title"), bilingual(item, "details")
        if not all((title["en"], title["ar"], details["en"], details["ar"])):
            raise ValidationError("contentRequired")
        order = parse_int(item.get("order"), "order")
        sections.append({"title": title, "details": details, "order": order if order is not None else index})
    return sorted(sections, key=lambda s: s["order"])


def get_terms() -> dict:
    with SessionLocal() as db:
        row = get_or_create_singleton(db, TermsAndConditions, {"content": DEFAULT_TERMS})
        return {"content": list(row.content or [])}


def update_terms(data: Mapping) -> dict:
    content = _parse_terms(data.get("content"))
    with SessionLocal() as db:
        row = get_or_create_singleton(db, TermsAndConditions, {"content": DEFAULT_TERMS})
        row.content = content
        db.commit()
        db.refresh(row)
        return {"content": list(row.content or [])}


# ────────────────────────────────────────────────────────────
# What we do
# ────────────────────────────────────────────────────────────
def _serialize_what_we_do(row: WhatWeDo) -> dict:
    return {"content": {"en": row.content_en, "ar": row.content_ar}}


def get_what_we_do() -> dict:
    with SessionLocal() as db:
        return _serialize_what_we_do(get_or_create_singleton(db, WhatWeDo, DEFAULT_WHAT_WE_DO))


def update_what_we_do(data: Mapping) -> dict:
    content = bilingual(data, "content")
    if not content["en"] or not content["ar"]:
        raise ValidationError("contentRequired")
    with SessionLocal() as db:
        row = get_or_create_singleton(db, WhatWeDo, DEFAULT_WHAT_WE_DO)
        row.content_en, row.content_ar = content["en"], content["ar"]
        db.commit()
        db.refresh(row)
        return _serialize_what_we_do(row)
