"""Password hashing and signed access tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from config import Settings

# Use pbkdf2_sha256 to avoid bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class InvalidToken(Exception):
    pass


class Identity(BaseModel):
    """Decoded token payload attached to the request by authenticate()."""

    id: str
    name: str = ""
    is_admin: bool = False


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        # stored value is not a recognised hash
        return False


def create_access_token(settings: Settings, user: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {
        "sub": str(user["_id"]),
        "name": user.get("name", ""),
        "isAdmin": bool(user.get("isAdmin", False)),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(settings: Settings, token: str) -> Identity:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc
    user_id = payload.get("sub")
    if not user_id:
        raise InvalidToken("Token has no subject")
    return Identity(id=user_id, name=payload.get("name", ""), is_admin=bool(payload.get("isAdmin", False)))
