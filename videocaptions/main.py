"""Video captions FastAPI application.

Assembles the video, caption and flag routers into a single service used by
the captions player.  Run with ``uvicorn videocaptions.main:app``.
"""

import json
import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from videocaptions.api.endpoints import captions, flags, videos
from videocaptions.core.config import settings
from videocaptions.core.errors import (
    ContentFetchError,
    ContentNotFoundError,
    InvalidFlagTokenError,
    MalformedContentError,
)
from videocaptions.models.common import ProblemDetail
from videocaptions.utils.observability import configure_observability

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME, version=settings.APP_VERSION)

# ---------------------------------------------------------------------------
# CORS middleware
#
# See: https://fastapi.tiangolo.com/tutorial/cors/
# ---------------------------------------------------------------------------

logger.debug("CORS origins: %s", settings.parsed_cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.parsed_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Registered after CORSMiddleware so it wraps it and also decorates preflight
# responses.  Lets pages on public origins call a player backend running on
# localhost / a private network (Private Network Access).
@app.middleware("http")
async def allow_private_network(request: Request, call_next):
    response = await call_next(request)
    response.headers["Access-Control-Allow-Private-Network"] = "true"
    return response


app.include_router(videos.router)
app.include_router(captions.router)
app.include_router(flags.router)

configure_observability(app)


@app.on_event("startup")
async def startup_event():
    if not settings.FLAG_SECRET:
        logger.warning("FLAG_SECRET is not set; the /flags routes will fail until it is")

    # Sensitive values are masked so secrets never reach the logs.
    def _mask(key: str, value):  # noqa: D401
        sensitive_keywords = {"KEY", "TOKEN", "SECRET", "PASSWORD"}
        return "***" if any(k in key.upper() for k in sensitive_keywords) else value

    settings_dump = {k: _mask(k, v) for k, v in settings.model_dump().items()}
    logger.debug(
        "Pydantic settings at startup: %s", json.dumps(settings_dump, indent=2, default=str)
    )


# ---------------------------------------------------------------------------
# Exception handlers – RFC 7807 problem bodies
# ---------------------------------------------------------------------------


def _problem_response(request: Request, status_code: int, detail: str | None):
    """Build an RFC7807-style JSON error body."""

    return JSONResponse(
        status_code=status_code,
        content=ProblemDetail(
            type="about:blank",
            title=HTTPStatus(status_code).phrase,
            status=status_code,
            detail=detail,
            instance=str(request.url),
        ).model_dump(exclude_none=True),
    )


# Starlette raises its own HTTPException for unknown routes and methods.
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _problem_response(request, exc.status_code, exc.detail)


@app.exception_handler(ContentNotFoundError)
async def content_not_found_handler(request: Request, exc: ContentNotFoundError):
    logger.info("Content not found: %s", exc.path)
    return _problem_response(request, status.HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(MalformedContentError)
@app.exception_handler(ContentFetchError)
async def upstream_content_handler(request: Request, exc: Exception):
    logger.warning("Upstream content problem: %s", exc)
    return _problem_response(request, status.HTTP_502_BAD_GATEWAY, str(exc))


@app.exception_handler(InvalidFlagTokenError)
async def invalid_flag_token_handler(request: Request, exc: InvalidFlagTokenError):
    # One fixed message: callers must not learn why verification failed.
    return _problem_response(request, status.HTTP_403_FORBIDDEN, str(exc))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected internal server error occurred.",
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors and return FastAPI's default 422 response."""
    logger.error("Request validation failed: %s", exc.errors())
    return await request_validation_exception_handler(request, exc)


@app.get("/", summary="Health check")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}!"}
