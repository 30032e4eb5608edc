"""
Error taxonomy for the driver API.

Every error is rendered to clients as ``{"error": "<message>"}`` with the
status code carried by the exception class. Handlers are registered on the
FastAPI app by ``register_exception_handlers``.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

log = logging.getLogger(__name__)


class DeliveryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingParameter(DeliveryError):
    status_code = 400


class InvalidStateTransition(DeliveryError):
    status_code = 400


class Forbidden(DeliveryError):
    status_code = 403


class NotFound(DeliveryError):
    status_code = 404


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def delivery_error_handler(request: Request, exc: DeliveryError):
    log.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: HTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Report the first failing field, e.g. "body.latitude: Field required"
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{where}: {first.get('msg')}" if where else first.get("msg")
    else:
        message = "Invalid request"
    return error_response(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DeliveryError, delivery_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
