from datetime import timedelta
import hashlib
import secrets
from typing import Any, Dict, Optional
from passlib.context import CryptContext
from jose import jwt, JWTError
from milkrun.auth.constants import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE
from milkrun.common.utils import now
from milkrun.config.settings import config_settings

PASS_HASH_SCHEME = config_settings.PASS_HASH_SCHEME
JWT_ALGO = config_settings.JWT_ALGO

ACCESS_TOKEN_EXPIRE_MINUTES = int(config_settings.ACCESS_TOKEN_EXPIRE_MINUTES)
REFRESH_TOKEN_EXPIRE_DAYS = int(config_settings.REFRESH_TOKEN_EXPIRE_DAYS)

pwd_context = CryptContext(schemes=[PASS_HASH_SCHEME], deprecated="auto")


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)

def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    if not plain_password or not password_hash:
        return False
    return pwd_context.verify(plain_password, password_hash)


def hash_token(plain: str) -> str:
    return hashlib.sha256(plain.encode()).hexdigest()


def _token_claims(user, token_type: str, expires_in: timedelta) -> Dict[str, Any]:
    issued = now()
    return {
        "sub": str(user.public_id),
        "email": user.email,
        "phone": user.phone,
        "role": user.role,
        "type": token_type,
        "iat": int(issued.timestamp()),
        "exp": int((issued + expires_in).timestamp()),
        "jti": secrets.token_hex(16),  # two tokens minted in the same second still differ
    }


def create_access_token(user, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    claims = _token_claims(user, ACCESS_TOKEN_TYPE, timedelta(minutes=expires_minutes))
    return jwt.encode(claims=claims, key=config_settings.JWT_ACCESS_SECRET, algorithm=JWT_ALGO)

def create_refresh_token(user, expires_days: int = REFRESH_TOKEN_EXPIRE_DAYS) -> str:
    claims = _token_claims(user, REFRESH_TOKEN_TYPE, timedelta(days=expires_days))
    return jwt.encode(claims=claims, key=config_settings.JWT_REFRESH_SECRET, algorithm=JWT_ALGO)


def _decode(token: str, key: str, token_type: str) -> Optional[Dict[str, Any]]:
    """Verify signature, expiry and token type. Returns the claims or None."""
    try:
        claims = jwt.decode(token, key=key, algorithms=[JWT_ALGO])
    except JWTError:
        return None
    if claims.get("type") != token_type:
        return None
    return claims

def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, config_settings.JWT_ACCESS_SECRET, ACCESS_TOKEN_TYPE)

def decode_refresh_token(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, config_settings.JWT_REFRESH_SECRET, REFRESH_TOKEN_TYPE)
