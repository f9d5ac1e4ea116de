"""Exception handlers rendering domain errors as ``{success: false, error}``."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

logger = structlog.get_logger(__name__)


def first_message(messages) -> str:
    """Flatten Protean's keyed error messages to the first human-readable one."""
    if isinstance(messages, dict):
        for value in messages.values():
            return first_message(value)
        return ""
    if isinstance(messages, list | tuple):
        return first_message(messages[0]) if messages else ""
    return str(messages)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        message = first_message(getattr(exc, "messages", None) or (exc.args[0] if exc.args else str(exc)))
        logger.info("Resource not found", path=request.url.path, error=message)
        return _failure(404, message)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        message = first_message(exc.messages)
        logger.info("Request rejected", path=request.url.path, error=message)
        return _failure(400, message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if errors:
            field = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
            message = f"{field}: {errors[0].get('msg')}" if field else str(errors[0].get("msg"))
        else:
            message = "Invalid request"
        return _failure(400, message)
