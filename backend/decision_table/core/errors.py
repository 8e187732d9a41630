"""
HTTP error model and exception handlers

Every error leaves the service as {"code": <status>, "message": <text>}.
"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from decision_table.components.contracts import ErrorMessage
from decision_table.components.evaluator import MissingFieldError
from decision_table.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

INVALID_PARAMS_FORMAT = "INVALID_PARAMS_FORMAT"
NOT_FOUND = "NOT_FOUND"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
UNHANDLED_REJECTION = "UNHANDLED_REJECTION"

_HTTP_MESSAGES = {
    400: INVALID_PARAMS_FORMAT,
    404: NOT_FOUND,
    405: METHOD_NOT_ALLOWED,
    413: PAYLOAD_TOO_LARGE,
}


class ApiError(Exception):
    """Error raised by route code, rendered with its status code and message"""

    status_code = 400
    message = INVALID_PARAMS_FORMAT

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        if message is not None:
            self.message = message
        self.field = field
        super().__init__(self.message)


class InvalidParamsFormatError(ApiError):
    """Body is not a JSON object matching the input record"""


class PayloadTooLargeError(ApiError):
    status_code = 413
    message = PAYLOAD_TOO_LARGE


class UnsupportedCombinationError(ApiError):
    """Input classified as Error: no rule covers the a/b/c combination"""

    message = "Invalid params format"


class ValueOutOfRangeError(ApiError):
    """Computed value is not a finite number and cannot be sent as JSON"""

    message = "Computed value is out of range"


def error_response(status_code: int, message: str, field: Optional[str] = None,
                   headers: Optional[dict] = None) -> JSONResponse:
    body = ErrorMessage(code=status_code, message=message, field=field).to_body()
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message, exc.field)


async def missing_field_handler(request: Request, exc: MissingFieldError) -> JSONResponse:
    logger.info(
        "Missing field %s for outcome %s under %s",
        exc.field, exc.outcome.value, exc.rule_set.value,
    )
    return error_response(400, str(exc), exc.field)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        logger.warning("Method %s not allowed on %s", request.method, request.url.path)
    message = _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Invalid request on %s: %s", request.url.path, exc.errors())
    return error_response(400, INVALID_PARAMS_FORMAT)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected faults and answer with a generic 500"""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        }
    )
    return error_response(500, UNHANDLED_REJECTION)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(MissingFieldError, missing_field_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
