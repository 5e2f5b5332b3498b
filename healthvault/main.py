import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root wherever uvicorn is started from
_PROJ_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJ_ROOT / ".env")

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException

from healthvault.api.auth import router as auth_router
from healthvault.api.records import router as records_router
from healthvault.api.tips import router as tips_router
from healthvault.api.wellness import router as wellness_router
from healthvault.core.config import DEFAULT_SECRET_KEY, Settings, settings as default_settings
from healthvault.core.errors import AppError
from healthvault.core.rate_limit import limiter, use_settings
from healthvault.files import UPLOADS_URL_PREFIX, FileStore, LocalFileStore
from healthvault.logging import setup_logging
from healthvault.storage import Storage, build_storage

log = logging.getLogger("healthvault")


def _error_response(request: Request, status_code: int, detail: str) -> JSONResponse:
    rid = getattr(request.state, "request_id", None)
    body = {"message": detail, "status_code": status_code}
    if rid:
        body["request_id"] = rid
    return JSONResponse(status_code=status_code, content=body)


def _validation_error_message(exc: RequestValidationError) -> str:
    errs = exc.errors()
    if not errs:
        return "Invalid request"
    first = errs[0]
    loc = [str(p) for p in (first.get("loc") or []) if p != "body"]
    field = loc[-1] if loc else None
    if first.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    msg = first.get("msg") or "Invalid request"
    # pydantic prefixes messages raised from field validators
    if msg.startswith("Value error, "):
        return msg[len("Value error, ") :]
    return f"{field}: {msg}" if field else msg


def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info(
        "Request validation error (400): path=%s method=%s detail=%s",
        request.url.path,
        request.method,
        exc.errors(),
    )
    return _error_response(request, 400, _validation_error_message(exc))


def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("Request failed (%s): path=%s %s", exc.status_code, request.url.path, exc.message)
    return _error_response(request, exc.status_code, exc.message)


def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.detail if isinstance(exc.detail, str) else str(exc.detail))


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    log.warning("Rate limit exceeded: path=%s", request.url.path)
    return _error_response(request, 429, "Too many requests. Please wait a minute and try again.")


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled exception: path=%s %s", request.url.path, exc, exc_info=exc)
    return _error_response(request, 500, "Internal server error")


def _check_settings(settings: Settings) -> None:
    if settings.is_production and settings.secret_key == DEFAULT_SECRET_KEY:
        log.warning("SECRET_KEY is the default value; tokens can be forged. Set SECRET_KEY in production.")


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
    file_store: FileStore | None = None,
) -> FastAPI:
    """
    Build the application. Storage and file store are injected by tests;
    otherwise they come from settings. Backend selection errors surface here,
    before the server accepts traffic.
    """
    settings = settings or default_settings
    _check_settings(settings)
    if storage is None:
        storage = build_storage(settings)
    if file_store is None:
        file_store = LocalFileStore(Path(settings.upload_dir))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage.init()
        log.info("Storage backend: %s", storage.name)
        try:
            yield
        finally:
            storage.close()

    app = FastAPI(
        title="HealthVault API",
        description="Personal health records and wellness tracking API",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.file_store = file_store
    app.state.limiter = limiter
    use_settings(settings)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.middleware("http")
    async def request_id_and_latency(request: Request, call_next):
        request.state.request_id = str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = request.state.request_id
        log.info(
            "request_id=%s method=%s path=%s status=%s latency_ms=%.2f",
            request.state.request_id,
            request.method,
            request.url.path,
            response.status_code,
            latency_ms,
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(auth_router)
    app.include_router(records_router)
    app.include_router(wellness_router)
    app.include_router(tips_router)

    if isinstance(file_store, LocalFileStore):
        app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=str(file_store.root)), name="uploads")

    @app.get("/health")
    def health():
        return {"status": "ok", "storage": storage.name}

    return app


setup_logging(level=default_settings.log_level)
app = create_app()
