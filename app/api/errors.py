# app/api/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import BadRequestError, ServiceError
from app.core.settings import get_settings

log = logging.getLogger("auth.errors")


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    log.error("%s %s -> %d %s (%s)", request.method, request.url.path,
              exc.status_code, exc.message, exc.coming_from)
    return JSONResponse(status_code=exc.status_code, content=exc.serialize())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Ошибки разбора запроса (битый JSON, параметры пути) отдаём в том же
    формате, что и остальные ошибки клиента: 400 с первым сообщением.
    """
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return await service_error_handler(
        request, BadRequestError(message, f"{request.method} {request.url.path}")
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Неожиданные ошибки (БД, брокер, сеть): логируем с трейсбеком,
    клиенту отдаём 500. Текст исключения добавляется только в DEBUG.
    """
    log.exception("%s %s failed: %s", request.method, request.url.path, exc)
    content = {
        "message": "Internal server error",
        "statusCode": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "status": "error",
        "comingFrom": f"{request.method} {request.url.path}",
    }
    if get_settings().DEBUG:
        content["detail"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
