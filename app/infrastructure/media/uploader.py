# app/infrastructure/media/uploader.py
from __future__ import annotations

"""
Загрузка изображений профиля в Cloudinary.

Ошибка Cloudinary не бросается наружу: логируется и возвращается
UploadResult без public_id; что это значит, решает вызывающий код
(signup отвечает клиенту 400).
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi.concurrency import run_in_threadpool

log = logging.getLogger("auth.uploader")


@dataclass
class UploadResult:
    public_id: Optional[str] = None
    secure_url: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> "UploadResult":
        return cls(public_id=response.get("public_id"), secure_url=response.get("secure_url"))


class MediaUploader:
    def __init__(self, cloud_name: str, api_key: str, api_secret: str) -> None:
        # глобальная конфигурация SDK; вызывается один раз при сборке контейнера
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    async def uploads(
        self,
        file: str,
        public_id: Optional[str] = None,
        overwrite: bool = False,
        invalidate: bool = False,
    ) -> UploadResult:
        """
        Загружает файл (data URI / URL / путь) под заданным public_id.
        SDK синхронный, поэтому вызов уходит в threadpool.
        """
        try:
            response = await run_in_threadpool(
                cloudinary.uploader.upload,
                file,
                public_id=public_id,
                overwrite=overwrite,
                invalidate=invalidate,
                resource_type="auto",
            )
        except CloudinaryError as e:
            log.error("upload of %s failed: %s", public_id, e)
            return UploadResult(error=str(e))
        return UploadResult.from_response(response)
