from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import PyJWTError as JWTError
import logging

import config

ALGORITHM = "HS256"

logger = logging.getLogger(__name__)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.JWT_EXPIRES_MINUTES)
    )
    to_encode.update({"exp": expire, "type": "access"})
    token = jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=ALGORITHM)
    logger.debug("Access token created for %s expiring at %s", data.get("sub", "[no sub]"), expire)
    return token


def create_admin_token(admin_id: str) -> str:
    return create_access_token({"sub": str(admin_id)})


def decode_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[ALGORITHM])
        logger.debug("Token successfully decoded for %s", payload.get("sub"))
        return payload
    except JWTError as e:
        logger.warning("Failed to decode JWT: %s", e)
        return None
