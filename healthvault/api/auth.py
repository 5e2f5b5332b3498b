import logging

from fastapi import APIRouter, Depends, Request

from healthvault.api.deps import get_current_user, get_settings, get_storage
from healthvault.core.config import Settings
from healthvault.core.errors import ConflictError, Unauthorized
from healthvault.core.rate_limit import auth_rate_limit, limiter
from healthvault.core.security import create_access_token, hash_password, verify_password
from healthvault.schemas import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserPublic
from healthvault.storage import NewUser, Storage, User

log = logging.getLogger("healthvault.auth")

router = APIRouter(prefix="/api/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"


def _public(user: User) -> UserPublic:
    return UserPublic(id=user.id, username=user.username, email=user.email)


def _token_for(user: User, settings: Settings) -> str:
    return create_access_token(
        {"id": user.id, "username": user.username, "email": user.email},
        settings.secret_key,
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit(auth_rate_limit)
def register(
    request: Request,
    body: RegisterRequest,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    if storage.get_user_by_email(body.email):
        raise ConflictError("User already exists with this email")
    if storage.get_user_by_username(body.username):
        raise ConflictError("Username already taken")
    user = storage.create_user(
        NewUser(username=body.username, email=body.email, password=hash_password(body.password))
    )
    log.info("register: user_id=%s", user.id)
    return AuthResponse(
        message="User created successfully",
        token=_token_for(user, settings),
        user=_public(user),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(auth_rate_limit)
def login(
    request: Request,
    body: LoginRequest,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    user = storage.get_user_with_password(body.email)
    # Unknown email and wrong password share one answer
    if not user or not verify_password(body.password, user.password):
        log.info("login failed")
        raise Unauthorized(INVALID_CREDENTIALS)
    public = user.public()
    return AuthResponse(
        message="Login successful",
        token=_token_for(public, settings),
        user=_public(public),
    )


@router.get("/me", response_model=MeResponse)
def me(user: User = Depends(get_current_user)):
    return MeResponse(user=_public(user))
