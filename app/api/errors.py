"""Maps exceptions to the {status, error, message} envelope."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import ConflictError, NotFoundError
from app.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

REQUEST_PARTS = ("body", "query", "path", "header", "cookie")


def error_response(status_code: int, error: str, message: str | None) -> JSONResponse:
    body = ErrorResponse(status=status_code, error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _field_name(loc) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(parts)


def _is_malformed_body(error: dict) -> bool:
    # Unparseable JSON, or a body that is not an object at all
    return error.get("type") == "json_invalid" or tuple(error.get("loc", ())) == ("body",)


async def not_found_handler(request: Request, exc: NotFoundError):
    return error_response(404, "Not Found", exc.message)


async def conflict_handler(request: Request, exc: ConflictError):
    return error_response(409, "Conflict", exc.message)


async def validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    malformed = [e for e in errors if _is_malformed_body(e)]
    if malformed:
        return error_response(400, "Malformed Request", f"Invalid request body: {malformed[0]['msg']}")

    message = "; ".join(f"{_field_name(e['loc'])}: {e['msg']}" for e in errors)
    return error_response(400, "Validation Error", message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    phrase = HTTPStatus(exc.status_code).phrase
    response = error_response(exc.status_code, phrase, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal Error", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(RequestValidationError, validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
