# school_admin/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import settings

logger = logging.getLogger(__name__)

_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)


def hash_password(password: str) -> str:
    return _pwd.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return _pwd.verify(plain_password, password_hash)
    except ValueError:
        # Malformed hash in the database
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(admin_id: Any, expires_days: Optional[int] = None) -> str:
    """Signed HS256 token carrying the admin id in the `id` claim"""
    expire = datetime.now(timezone.utc) + timedelta(days=expires_days or settings.jwt_expire_days)
    payload = {"id": str(admin_id), "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the claims, or None for a malformed, forged or expired token"""
    if not isinstance(token, str) or token.count(".") != 2:
        return None
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None
