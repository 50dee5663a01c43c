"""FastAPI application that exposes the user directory endpoints."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, List, Optional

from fastapi import Body, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .errors import (
    DuplicateEmailError,
    InternalServerError,
    InvalidBodyError,
    MissingUserIdError,
    RouteNotFoundError,
    UserNotFoundError,
    UserServiceError,
)
from .models import User
from .store import UserStore
from .validation import require_fields, validate_email, validate_name

logger = logging.getLogger("userservice.api")

REQUIRED_USER_FIELDS = ("name", "email")


class CreateUserRequest(BaseModel):
    # Types are checked by the validators so each failure maps to its own error.
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    email: Any = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime = Field(..., serialization_alias="createdAt")


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _generate_user_id() -> str:
    return str(uuid.uuid4())


def _error_response(exc: UserServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
    )


def create_app(
    *,
    store: UserStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application serving the user endpoints.

    The store is owned by the returned application; pass an existing
    :class:`UserStore` to share or pre-populate it.
    """

    user_store = store if store is not None else UserStore()
    app_settings = settings or load_settings()

    app = FastAPI(
        title="User Directory Service",
        version="1.0.0",
        description="In-memory user records with validation and unique emails.",
        redirect_slashes=False,
    )
    app.state.store = user_store
    app.state.settings = app_settings

    # Runs inside CORSMiddleware, which add_middleware below wraps around it.
    @app.middleware("http")
    async def catch_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return _error_response(InternalServerError())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_store() -> UserStore:
        return user_store

    @app.get("/health", response_model=HealthResponse)
    async def healthcheck() -> HealthResponse:
        return HealthResponse(status="OK", timestamp=_utcnow())

    @app.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
    async def create_user(
        payload: Optional[CreateUserRequest] = Body(default=None),
        store: UserStore = Depends(get_store),
    ) -> UserResponse:
        fields = payload.model_dump() if payload is not None else {}
        require_fields(fields, REQUIRED_USER_FIELDS)
        name = validate_name(fields["name"])
        email = validate_email(fields["email"])

        # No await between the lookup and the insert.
        if store.find_by_email(email) is not None:
            logger.debug("Rejected duplicate email for new user")
            raise DuplicateEmailError()

        user = User(
            id=_generate_user_id(),
            name=name,
            email=email,
            created_at=_utcnow(),
        )
        store.insert(user)
        logger.info("Created user %s", user.id)
        return user_to_response(user)

    @app.get("/users", response_model=List[UserResponse])
    async def list_users(store: UserStore = Depends(get_store)) -> List[UserResponse]:
        return [user_to_response(user) for user in store.get_all()]

    @app.get("/users/{user_id}", response_model=UserResponse)
    async def read_user(user_id: str, store: UserStore = Depends(get_store)) -> UserResponse:
        if not user_id:
            raise MissingUserIdError()
        user = store.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user_to_response(user)

    @app.exception_handler(UserServiceError)
    async def handle_user_service_error(_: Request, exc: UserServiceError) -> JSONResponse:
        logger.debug("Request failed with %s: %s", exc.status_code, exc.error)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Invalid request body on %s: %s", request.url.path, exc.errors())
        return _error_response(InvalidBodyError())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths raise 404 and known paths with the wrong method raise 405.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error_response(RouteNotFoundError())
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": HTTPStatus(exc.status_code).phrase, "message": str(exc.detail)},
            headers=exc.headers,
        )

    return app


def _build_default_app() -> FastAPI:
    try:
        settings = load_settings()
    except ValueError as exc:
        logger.warning("Ignoring invalid configuration for the default app: %s", exc)
        settings = Settings()
    return create_app(settings=settings)


app = _build_default_app()


__all__ = [
    "CreateUserRequest",
    "HealthResponse",
    "UserResponse",
    "app",
    "create_app",
    "user_to_response",
]
