# services/car_service.py
from __future__ import annotations
import logging
import uuid
from typing import List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import joinedload, selectinload

from db import SessionLocal
from models import Car, CarImage, Make, CAR_CONDITIONS
from services.image_association import (
    StoredImage,
    Reconciliation,
    assert_single_main,
    reconcile_car_images,
    remove_car_image,
)
from services.make_service import serialize_make_ref
from services.upload_pipeline import StoredUpload, discard, stored_uploads
from utils.errors import NotFoundError, ValidationError
from utils.multipart import UploadedFile
from utils.sanitize import bilingual, clean_text, parse_bool, parse_float, parse_int, parse_uuid

logger = logging.getLogger(__name__)

CAR_FOLDER = "cars"
SIMILAR_LIMIT = 6

# request field -> column prefix for bilingual pairs
BILINGUAL_FIELDS = {
    "model": "model",
    "name": "name",
    "exteriorColor": "exterior_color",
    "interiorColor": "interior_color",
    "engine": "engine",
    "bhp": "bhp",
}
REQUIRED_COLUMNS = (
    "model_en", "model_ar", "name_en", "name_ar",
    "year", "condition", "mileage", "stock_number", "price",
)


# ───────────── SERIALIZATION ───────────────────────────────────────────────────
def _pair(car: Car, prefix: str) -> dict:
    return {"en": getattr(car, f"{prefix}_en"), "ar": getattr(car, f"{prefix}_ar")}


def serialize_car(c: Car) -> dict:
    images = sorted(c.images, key=lambda r: r.position)
    main = next((r.url for r in images if r.is_main), None)
    return {
        "id":            str(c.id),
        "make":          serialize_make_ref(c.make) if c.make else None,
        "model":         _pair(c, "model"),
        "name":          _pair(c, "name"),
        "year":          c.year,
        "condition":     c.condition,
        "mileage":       c.mileage,
        "stockNumber":   c.stock_number,
        "price":         c.price,
        "exteriorColor": _pair(c, "exterior_color"),
        "interiorColor": _pair(c, "interior_color"),
        "engine":        _pair(c, "engine"),
        "bhp":           _pair(c, "bhp"),
        "door":          c.door,
        "warranty":      c.warranty,
        "images":        [{"url": r.url, "isMain": r.is_main} for r in images],
        "mainImage":     main,
        "createdAt":     c.created_at.isoformat() if c.created_at else None,
        "updatedAt":     c.updated_at.isoformat() if c.updated_at else None,
    }


# ───────────── FIELD PARSING ───────────────────────────────────────────────────
def _car_values(form: Mapping, creating: bool) -> dict:
    """Column values present in `form`; on create, every required column must be there."""
    values = {}
    for field, prefix in BILINGUAL_FIELDS.items():
        pair = bilingual(form, field)
        for lang in ("en", "ar"):
            if pair[lang] is not None:
                values[f"{prefix}_{lang}"] = pair[lang]

    if form.get("year") not in (None, ""):
        values["year"] = parse_int(form.get("year"), "year")
    if form.get("mileage") not in (None, ""):
        values["mileage"] = parse_int(form.get("mileage"), "mileage")
    if form.get("door") not in (None, ""):
        values["door"] = parse_int(form.get("door"), "door")
    if form.get("price") not in (None, ""):
        values["price"] = parse_float(form.get("price"), "price")
    if form.get("warranty") not in (None, ""):
        values["warranty"] = parse_bool(form.get("warranty"), False)

    condition = clean_text(form.get("condition"))
    if condition is not None:
        if condition not in CAR_CONDITIONS:
            raise ValidationError("invalidCondition", choices=", ".join(CAR_CONDITIONS))
        values["condition"] = condition

    stock = clean_text(form.get("stockNumber"))
    if stock is not None:
        values["stock_number"] = stock

    if creating:
        missing = [col for col in REQUIRED_COLUMNS if values.get(col) is None]
        if missing:
            raise ValidationError("requiredFieldsMissing", fields=", ".join(missing))
    return values


def _resolve_make(db, make_value, model_en: Optional[str], model_ar: Optional[str]) -> Make:
    """
    `make` is either an existing make id or a make name. Names are matched
    case-insensitively and created on first use; the car's model is added to the
    make's model list when missing.
    """
    make_id = parse_uuid(make_value)
    if make_id is not None:
        make = db.get(Make, make_id)
        if not make:
            raise NotFoundError()
        return make

    name = clean_text(make_value)
    if not name or not model_en:
        raise ValidationError("make_model_required")

    model_entry = {"en": model_en, "ar": model_ar or model_en}
    make = db.query(Make).filter(func.lower(Make.name_en) == name.lower()).first()
    if not make:
        make = Make(name_en=name, name_ar=name, models=[model_entry])
        db.add(make)
        db.flush()
        logger.info("created make %s for new car", name)
    elif not any((m.get("en") or "").lower() == model_en.lower() for m in (make.models or [])):
        make.models = list(make.models or []) + [model_entry]
    return make


def _ensure_unique_stock(db, stock_number: Optional[str], exclude_id: Optional[uuid.UUID] = None) -> None:
    if not stock_number:
        return
    q = db.query(Car.id).filter(Car.stock_number == stock_number)
    if exclude_id:
        q = q.filter(Car.id != exclude_id)
    if q.first():
        raise ValidationError("duplicate_key", field="stockNumber")


def _main_from_form(form: Mapping, stored: Sequence[StoredUpload]) -> Optional[str]:
    """`mainImage` may name an existing URL or the filename of a file in this upload."""
    main = clean_text(form.get("mainImage"))
    if not main:
        return None
    for s in stored:
        if s.original_name == main:
            return s.url
    return main


# ───────────── IMAGE ROWS ──────────────────────────────────────────────────────
def _apply_images(db, car: Car, rec: Reconciliation, stored: Sequence[StoredUpload] = ()) -> None:
    """
    Make car.images match `rec.images` (order and main flag). Flags are cleared and
    flushed before the new main is set, so the one-main-per-car index never sees two.
    """
    meta = {s.url: s for s in stored}
    rows_by_url = {row.url: row for row in car.images}

    for row in car.images:
        row.is_main = False
    db.flush()

    keep = {img.url for img in rec.images}
    for row in list(car.images):
        if row.url not in keep:
            car.images.remove(row)
    db.flush()

    ordered = []
    for position, img in enumerate(rec.images):
        row = rows_by_url.get(img.url)
        if row is None:
            s = meta.get(img.url)
            row = CarImage(
                url=img.url,
                is_main=False,
                content_type=s.content_type if s else None,
                original_filename=s.original_name if s else None,
                width=s.width if s else None,
                height=s.height if s else None,
                bytes=s.size_bytes if s else None,
            )
            car.images.append(row)
        row.position = position
        ordered.append((row, img.is_main))
    db.flush()

    for row, is_main in ordered:
        if is_main:
            row.is_main = True
    db.flush()

    assert_single_main([StoredImage(row.url, row.is_main) for row, _ in ordered])


def _existing_images(car: Car) -> List[StoredImage]:
    return [StoredImage(r.url, r.is_main) for r in sorted(car.images, key=lambda r: r.position)]


def _load_car(db, car_id: uuid.UUID) -> Car:
    car = (
        db.query(Car)
        .options(joinedload(Car.make), selectinload(Car.images))
        .filter(Car.id == car_id)
        .first()
    )
    if not car:
        raise NotFoundError()
    return car


# ───────────── QUERIES ─────────────────────────────────────────────────────────
def list_cars(filters: Mapping, page: int = 1, limit: int = 10) -> Tuple[List[dict], int]:
    with SessionLocal() as db:
        q = db.query(Car)
        make = clean_text(filters.get("make"))
        if make:
            make_id = parse_uuid(make)
            if make_id:
                q = q.filter(Car.make_id == make_id)
            else:
                q = q.join(Make, Make.id == Car.make_id).filter(func.lower(Make.name_en) == make.lower())
        model = clean_text(filters.get("model"))
        if model:
            q = q.filter(or_(Car.model_en == model, Car.model_ar == model))
        year = parse_int(filters.get("year"), "year")
        if year:
            q = q.filter(Car.year == year)
        condition = clean_text(filters.get("condition"))
        if condition:
            q = q.filter(Car.condition == condition)

        total = q.count()
        cars = (
            q.options(joinedload(Car.make), selectinload(Car.images))
            .order_by(Car.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [serialize_car(c) for c in cars], total


def get_car(car_id: uuid.UUID) -> dict:
    with SessionLocal() as db:
        return serialize_car(_load_car(db, car_id))


def similar_cars(car_id: uuid.UUID, limit: int = SIMILAR_LIMIT) -> List[dict]:
    with SessionLocal() as db:
        car = _load_car(db, car_id)
        others = (
            db.query(Car)
            .options(joinedload(Car.make), selectinload(Car.images))
            .filter(Car.make_id == car.make_id, Car.id != car.id)
            .limit(limit)
            .all()
        )
        return [serialize_car(c) for c in others]


# ───────────── COMMANDS ────────────────────────────────────────────────────────
def create_car(form: Mapping, files: Sequence[UploadedFile] = ()) -> dict:
    values = _car_values(form, creating=True)
    if form.get("make") in (None, ""):
        raise ValidationError("makeRequired")

    with SessionLocal() as db:
        make = _resolve_make(db, form.get("make"), values.get("model_en"), values.get("model_ar"))
        _ensure_unique_stock(db, values.get("stock_number"))

        with stored_uploads(files, CAR_FOLDER) as stored:
            rec = reconcile_car_images(
                [], [s.url for s in stored], replace=True, main_image=_main_from_form(form, stored)
            )
            car = Car(make_id=make.id, **values)
            db.add(car)
            db.flush()
            _apply_images(db, car, rec, stored)
            db.commit()

        logger.info("created car %s with %d image(s)", car.id, len(rec.images))
        return serialize_car(_load_car(db, car.id))


def update_car(car_id: uuid.UUID, form: Mapping, files: Sequence[UploadedFile] = ()) -> dict:
    """
    Partial update. New files are appended, or replace every existing image when
    `replaceImages` is "true"; replaced files are deleted from storage after commit.
    """
    values = _car_values(form, creating=False)
    replace = parse_bool(form.get("replaceImages"), False)

    with SessionLocal() as db:
        car = _load_car(db, car_id)
        if form.get("make") not in (None, ""):
            make = _resolve_make(
                db,
                form.get("make"),
                values.get("model_en", car.model_en),
                values.get("model_ar", car.model_ar),
            )
            values["make_id"] = make.id
        _ensure_unique_stock(db, values.get("stock_number"), exclude_id=car.id)

        existing = _existing_images(car)
        with stored_uploads(files, CAR_FOLDER) as stored:
            rec = reconcile_car_images(
                existing,
                [s.url for s in stored],
                replace=replace,
                main_image=_main_from_form(form, stored),
            )
            for key, value in values.items():
                setattr(car, key, value)
            _apply_images(db, car, rec, stored)
            db.commit()

        discard(rec.removed)
        logger.info(
            "updated car %s: +%d image(s), -%d image(s)", car_id, len(rec.added), len(rec.removed)
        )
        db.expire_all()
        return serialize_car(_load_car(db, car_id))


def remove_image(car_id: uuid.UUID, url: str) -> dict:
    with SessionLocal() as db:
        car = _load_car(db, car_id)
        rec = remove_car_image(_existing_images(car), url)
        _apply_images(db, car, rec)
        db.commit()
        discard(rec.removed)
        db.expire_all()
        return serialize_car(_load_car(db, car_id))


def delete_car(car_id: uuid.UUID) -> None:
    with SessionLocal() as db:
        car = _load_car(db, car_id)
        urls = [r.url for r in car.images]
        db.delete(car)
        db.commit()
    discard(urls)
    logger.info("deleted car %s and %d image(s)", car_id, len(urls))
