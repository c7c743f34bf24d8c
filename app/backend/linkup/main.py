import logging
from typing import Any

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkup.api.routes import auth, posts, profile, users
from linkup.core.config import settings
from linkup.core.error_codes import ErrorCode
from linkup.core.exceptions import AppException
from linkup.core.redis import close_redis
from linkup.schemas.common import ErrorResponse

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("linkup")

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        traces_sample_rate=0.2,
        environment=settings.ENV,
        release=settings.GIT_SHA,
    )

# plain HTTPExceptions raised by FastAPI/Starlette themselves (404 route, 405 method...)
_STATUS_CODES = {
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    429: ErrorCode.RATE_LIMITED,
}


def _error(status_code: int, code: ErrorCode, message: str | None, details: dict[str, Any] | None = None) -> JSONResponse:
    body = ErrorResponse(error_code=code, user_message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


app = FastAPI(title="LinkUp API", version="0.1.0")


@app.on_event("shutdown")
async def _shutdown():
    await close_redis()


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.error_code.value)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response().model_dump(mode="json"))


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    return _error(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorCode.VALIDATION_ERROR,
        "Invalid request data",
        {"errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    code = _STATUS_CODES.get(exc.status_code, ErrorCode.BAD_REQUEST)
    return _error(exc.status_code, code, str(exc.detail) if exc.detail else None)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # a concurrent writer beat a read-then-insert check (duplicate email, follow pair...)
    msg = str(exc.orig).lower() if exc.orig else ""
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, msg)
    if "unique" in msg or "duplicate" in msg:
        return _error(status.HTTP_409_CONFLICT, ErrorCode.UNIQUE_CONSTRAINT_VIOLATION, "Unique constraint violated")
    return _error(status.HTTP_400_BAD_REQUEST, ErrorCode.DATABASE_ERROR, "Database error")


@app.exception_handler(SQLAlchemyError)
async def sa_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.DATABASE_ERROR, "Database error")


@app.exception_handler(Exception)
async def unhandled_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.INTERNAL_ERROR, "Internal server error")


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in (auth.router, profile.router, users.router, posts.router):
    app.include_router(router)


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
