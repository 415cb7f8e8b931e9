# Password hashing and JWT helpers

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import jwt, JWTError
from pydantic import BaseModel

from config.app_config import JWT_ALGORITHM, JWT_EXPIRE_DAYS, JWT_SECRET_KEY


class TokenData(BaseModel):
    user_id: int
    email: Optional[str] = None
    user_type: Optional[str] = None


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT carrying ``data`` plus an ``exp`` claim."""
    to_encode = dict(data)
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=JWT_EXPIRE_DAYS))
    to_encode["exp"] = expire
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[TokenData]:
    """Decode and validate a JWT. Returns None when it is invalid or expired."""
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None

    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        return None
    return TokenData(user_id=int(sub), email=payload.get("email"), user_type=payload.get("user_type"))


def token_for_user(user) -> str:
    """Issue the access token for a user record."""
    return create_access_token(
        data={"sub": str(user.id), "email": user.email, "user_type": user.user_type.value}
    )
