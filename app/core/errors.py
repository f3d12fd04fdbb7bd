# app/core/errors.py
from __future__ import annotations

"""
Иерархия ошибок сервиса.

    ServiceError (base)
    ├── BadRequestError      400
    └── NotFoundError        404

Каждая ошибка несёт сообщение для клиента и метку места возникновения
(coming_from), по которой её удобно искать в логах.
"""

from typing import Any, Dict

from fastapi import status


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, coming_from: str) -> None:
        self.message = message
        self.coming_from = coming_from
        super().__init__(message)

    def serialize(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "statusCode": self.status_code,
            "status": "error",
            "comingFrom": self.coming_from,
        }


class BadRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


__all__ = ["ServiceError", "BadRequestError", "NotFoundError"]
