# app/core/container.py
from __future__ import annotations

from typing import Optional

from fastapi import Request

from app.core.settings import get_settings, Settings
from app.infrastructure.media.uploader import MediaUploader
from app.infrastructure.queue.producer import MessagePublisher


class Container:
    """
    Простой контейнер зависимостей обработчиков:
      - settings: конфиг приложения (CLIENT_URL, exchange/routing key, JWT)
      - uploader: загрузка изображений профиля (Cloudinary)
      - publisher: публикация сообщений в RabbitMQ

    Живёт в app.state.container; в обработчики попадает через Depends(get_container),
    в тестах подменяется через app.dependency_overrides.
    """
    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        uploader: Optional[MediaUploader] = None,
        publisher: Optional[MessagePublisher] = None,
    ) -> None:
        self.settings: Settings = settings or get_settings()
        self.uploader = uploader or MediaUploader(
            cloud_name=self.settings.CLOUD_NAME,
            api_key=self.settings.CLOUD_API_KEY,
            api_secret=self.settings.CLOUD_API_SECRET,
        )
        self.publisher = publisher or MessagePublisher(
            self.settings.AMQP_URL,
            retries=self.settings.PUBLISH_RETRIES,
            retry_delay=self.settings.PUBLISH_RETRY_DELAY,
        )


def get_container(request: Request) -> Container:
    return request.app.state.container
