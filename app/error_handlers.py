import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaValidationError
from starlette.exceptions import HTTPException

from app.errors import ShiprocketError, ValidationError

logger = logging.getLogger(__name__)


def _failure(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


def _schema_message(errors: list[dict]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts)


def register_error_handlers(app: FastAPI):
    @app.exception_handler(ValidationError)
    async def missing_fields(request: Request, exc: ValidationError):
        logger.error("[API] Missing required fields: %s", exc.missing_fields)
        return _failure(400, str(exc), missing_fields=exc.missing_fields)

    @app.exception_handler(ShiprocketError)
    async def shiprocket_failure(request: Request, exc: ShiprocketError):
        logger.error("[API] %s %s failed: %s", request.method, request.url.path, exc)
        return _failure(400, str(exc))

    @app.exception_handler(SchemaValidationError)
    async def invalid_schema(request: Request, exc: SchemaValidationError):
        return _failure(400, _schema_message(exc.errors()))

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return _failure(400, _schema_message(exc.errors()))

    @app.exception_handler(HTTPException)
    async def http_failure(request: Request, exc: HTTPException):
        return _failure(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception):
        logger.exception("[API] Unhandled error on %s %s", request.method, request.url.path)
        return _failure(500, str(exc) or "Internal Server Error")
