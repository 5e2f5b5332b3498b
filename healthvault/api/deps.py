from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from healthvault.core.config import Settings
from healthvault.core.errors import Forbidden, NotFound, Unauthorized
from healthvault.core.security import decode_access_token
from healthvault.files import FileStore
from healthvault.storage import Storage, User

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_file_store(request: Request) -> FileStore:
    return request.app.state.file_store


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> dict:
    if not credentials or not (credentials.credentials or "").strip():
        raise Unauthorized("Access token required")
    payload = decode_access_token(credentials.credentials, settings.secret_key)
    if not payload or "id" not in payload:
        raise Forbidden("Invalid or expired token")
    return payload


def get_current_user(
    claims: dict = Depends(get_token_claims),
    storage: Storage = Depends(get_storage),
) -> User:
    """Claims are only a hint: the user must still exist in storage."""
    try:
        user_id = int(claims["id"])
    except (TypeError, ValueError):
        raise Forbidden("Invalid or expired token")
    user = storage.get_user(user_id)
    if not user:
        raise NotFound("User not found")
    return user
