from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from .config import settings

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7  # 7 days
MAX_BCRYPT_BYTES = 72  # bcrypt limit
TOKEN_CLAIMS = ("id", "username", "email")


def hash_password(password: str) -> str:
    p = password.encode("utf-8")[:MAX_BCRYPT_BYTES]
    return bcrypt.hashpw(p, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    p = plain.encode("utf-8")[:MAX_BCRYPT_BYTES]
    try:
        return bcrypt.checkpw(p, hashed.encode("utf-8"))
    except ValueError:
        # malformed hash
        return False


def create_access_token(data: dict, secret_key: str | None = None) -> str:
    """Signs ``{id, username, email}`` into a token valid for seven days."""
    to_encode = {k: data[k] for k in TOKEN_CLAIMS if k in data}
    to_encode["sub"] = str(data["id"])
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key or settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str | None = None) -> dict | None:
    try:
        return jwt.decode(token, secret_key or settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
