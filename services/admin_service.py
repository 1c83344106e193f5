# services/admin_service.py
from __future__ import annotations
import logging
import uuid
from typing import List, Mapping, Optional

from sqlalchemy import func

import config
from auth.token import create_admin_token
from auth.utils import hash_password, verify_password
from db import SessionLocal
from models import Admin
from utils.errors import NotFoundError, UnauthorizedError, ValidationError
from utils.sanitize import clean_text, is_valid_email

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def serialize_admin(a: Admin) -> dict:
    return {
        "id": str(a.id),
        "name": a.name,
        "mobile": a.mobile,
        "email": a.email,
        "createdAt": a.created_at.isoformat() if a.created_at else None,
    }


def _normalize_email(value) -> Optional[str]:
    email = clean_text(value)
    return email.lower() if email else None


def _check_password(password: Optional[str]) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("passwordTooShort")


def _ensure_unique_email(db, email: str, exclude_id: Optional[uuid.UUID] = None) -> None:
    q = db.query(Admin.id).filter(func.lower(Admin.email) == email)
    if exclude_id:
        q = q.filter(Admin.id != exclude_id)
    if q.first():
        raise ValidationError("duplicate_key", field="email")


def _get(db, admin_id: uuid.UUID) -> Admin:
    admin = db.get(Admin, admin_id)
    if not admin:
        raise NotFoundError("admin_not_found", id=admin_id)
    return admin


# ───────────── AUTH ────────────────────────────────────────────────────────────
def login(email, password) -> str:
    email = _normalize_email(email)
    if not email or not password:
        raise ValidationError("provide_email_password")
    with SessionLocal() as db:
        admin = db.query(Admin).filter(func.lower(Admin.email) == email).first()
        if not admin or not verify_password(password, admin.password_hash):
            logger.info("failed login for %s", email)
            raise UnauthorizedError("invalid_credentials")
        logger.info("admin %s signed in", admin.id)
        return create_admin_token(str(admin.id))


# ───────────── CRUD ────────────────────────────────────────────────────────────
def list_admins() -> List[dict]:
    with SessionLocal() as db:
        return [serialize_admin(a) for a in db.query(Admin).order_by(Admin.created_at).all()]


def get_admin(admin_id: uuid.UUID) -> dict:
    with SessionLocal() as db:
        return serialize_admin(_get(db, admin_id))


def create_admin(data: Mapping) -> dict:
    name, mobile = clean_text(data.get("name")), clean_text(data.get("mobile"))
    email, password = _normalize_email(data.get("email")), data.get("password")
    if not name:
        raise ValidationError("nameRequired")
    if not mobile:
        raise ValidationError("mobileRequired")
    if not email:
        raise ValidationError("emailRequired")
    if not is_valid_email(email):
        raise ValidationError("invalidEmail")
    _check_password(password)

    with SessionLocal() as db:
        _ensure_unique_email(db, email)
        admin = Admin(name=name, mobile=mobile, email=email, password_hash=hash_password(password))
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info("created admin %s", admin.id)
        return serialize_admin(admin)


def update_admin(admin_id: uuid.UUID, data: Mapping) -> dict:
    name, mobile = clean_text(data.get("name")), clean_text(data.get("mobile"))
    email, password = _normalize_email(data.get("email")), data.get("password")
    with SessionLocal() as db:
        admin = _get(db, admin_id)
        if name:
            admin.name = name
        if mobile:
            admin.mobile = mobile
        if email:
            if not is_valid_email(email):
                raise ValidationError("invalidEmail")
            _ensure_unique_email(db, email, exclude_id=admin.id)
            admin.email = email
        if password:
            _check_password(password)
            admin.password_hash = hash_password(password)
        db.commit()
        db.refresh(admin)
        return serialize_admin(admin)


def delete_admin(admin_id: uuid.UUID) -> None:
    with SessionLocal() as db:
        db.delete(_get(db, admin_id))
        db.commit()
        logger.info("deleted admin %s", admin_id)


def seed_root_admin() -> Optional[dict]:
    """Create the root admin from ROOT_ADMIN_* when the table is empty."""
    with SessionLocal() as db:
        if db.query(Admin.id).first():
            logger.info("admins already exist; skipping seed")
            return None
    if not config.ROOT_ADMIN_PASSWORD:
        raise RuntimeError("ROOT_ADMIN_PASSWORD is not set")
    return create_admin({
        "name": config.ROOT_ADMIN_NAME,
        "mobile": config.ROOT_ADMIN_MOBILE,
        "email": config.ROOT_ADMIN_EMAIL,
        "password": config.ROOT_ADMIN_PASSWORD,
    })
