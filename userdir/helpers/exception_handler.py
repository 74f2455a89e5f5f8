import logging
from typing import Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from userdir.schemas.sche_base import ResponseSchemaBase
from userdir.schemas.sche_user import to_field_errors

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = 'Internal server error'


class CustomException(Exception):
    http_code: int
    code: str
    message: str
    errors: Optional[Dict[str, str]]

    def __init__(self, http_code: int = None, code: str = None, message: str = None,
                 errors: Optional[Dict[str, str]] = None):
        self.http_code = http_code if http_code else 500
        self.code = code if code else str(self.http_code)
        self.message = message
        self.errors = errors
        super().__init__(message)


async def http_exception_handler(request: Request, exc: CustomException):
    return JSONResponse(
        status_code=exc.http_code,
        content=jsonable_encoder(ResponseSchemaBase().custom_response(exc.code, exc.message, exc.errors))
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = to_field_errors(exc.errors())
    logger.info(f"{request.method} {request.url.path} rejected: {errors}")
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(ResponseSchemaBase().custom_response('400', 'Validation error', errors))
    )


async def fastapi_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=jsonable_encoder(ResponseSchemaBase().custom_response('500', INTERNAL_ERROR_MESSAGE))
    )
