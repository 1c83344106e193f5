from typing import Optional
from db import SessionLocal
from models import Admin
from auth.token import decode_token
from utils.sanitize import parse_uuid


def get_current_admin(token: str) -> Optional[Admin]:
    payload = decode_token(token)
    if not payload:
        return None
    admin_id = parse_uuid(payload.get("sub"))
    if not admin_id:
        return None
    with SessionLocal() as db:
        admin = db.query(Admin).filter(Admin.id == admin_id).first()
        if admin:
            db.expunge(admin)
        return admin


def bearer_token(req) -> Optional[str]:
    auth = req.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        return None
    return auth[7:].strip() or None
