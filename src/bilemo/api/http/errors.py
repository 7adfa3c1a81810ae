"""Exception handlers mapping domain errors to JSON responses."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from src.bilemo.core.errors import BileMoError, EntityValidationError
from src.bilemo.core.validation import to_field_errors


def _validation_body(message: str, errors) -> dict:
    return {
        "message": message,
        "errors": [error.model_dump() for error in errors],
    }


async def bilemo_error_handler(request: Request, exc: BileMoError) -> JSONResponse:
    logger.bind(
        status_code=exc.status_code, error_code=exc.code
    ).info("{} {}: {}", request.method, request.url.path, exc.message)

    if isinstance(exc, EntityValidationError):
        content = _validation_body(exc.message, exc.errors)
    else:
        content = {"message": exc.message}
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = to_field_errors(exc.errors())
    logger.bind(status_code=400).info(
        "{} {}: invalid request ({} errors)", request.method, request.url.path, len(errors)
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_validation_body("Validation failed", errors),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BileMoError, bilemo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
