"""
Global error handling.

Every failure leaves the API as ``{"errors": [{type, msg, path, location}]}``
with the status taken from the raised error (500 when it carries none).
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from authserver.core import config

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'An unexpected error occurred'


def error_name(status_code: int) -> str:
    """http-errors style name for a status, e.g. 400 -> ``BadRequestError``."""
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return 'HttpError'
    name = ''.join(word.capitalize() for word in phrase.replace('-', ' ').split())
    return name if name.endswith('Error') else name + 'Error'


def error_entry(type_: str, msg: str, path: str = '', location: str = '') -> dict:
    return {'type': type_, 'msg': msg, 'path': path, 'location': location}


def error_response(status_code: int, errors: list[dict], headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'errors': errors}, headers=headers)


def _validation_message(error: dict) -> str:
    original = (error.get('ctx') or {}).get('error')
    if isinstance(original, Exception):
        return str(original)
    return error.get('msg', 'Invalid value').removeprefix('Value error, ')


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        exc.status_code,
        [error_entry(error_name(exc.status_code), str(exc.detail))],
        headers=getattr(exc, 'headers', None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        loc = list(error.get('loc', ()))
        location = str(loc.pop(0)) if loc else ''
        errors.append(
            error_entry(
                'field',
                _validation_message(error),
                path='.'.join(str(part) for part in loc),
                location=location,
            )
        )
    return error_response(status.HTTP_400_BAD_REQUEST, errors)


async def error_handler_middleware(request: Request, call_next):
    """Turn anything the exception handlers did not claim into a 500 envelope."""
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception('Unhandled error on %s %s', request.method, request.url.path)
        status_code = getattr(exc, 'status_code', None) or status.HTTP_500_INTERNAL_SERVER_ERROR
        hide_details = config.APP_ENV.lower() == 'production' and not config.DEBUG
        message = GENERIC_ERROR_MESSAGE if hide_details else str(exc)
        return error_response(status_code, [error_entry(type(exc).__name__, message)])


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.middleware('http')(error_handler_middleware)
