from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from booking_app.services.errors import ServiceError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def service_error_handler(_: Request, exc: ServiceError):
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(_: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Erro na requisição"
    return error_response(exc.status_code, message)


async def validation_exception_handler(_: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Dados inválidos") if errors else "Dados inválidos"
    logger.info("Validation error errors=%s", len(errors))
    return error_response(400, message)


async def unhandled_exception_handler(request: Request, _: Exception):
    logger.exception("Unhandled error path=%s", request.url.path)
    return error_response(500, "Erro interno do servidor")


def register_exception_handlers(app: FastAPI) -> None:
    """Todas as falhas saem como ``{"error": mensagem}``."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
