# app/infrastructure/queue/producer.py
from __future__ import annotations

"""
Публикация сообщений в RabbitMQ через direct-exchange.

Особенности:
- Exchange объявляется как durable/direct перед каждой публикацией.
- Сообщения помечаются как persistent (delivery_mode=2).
- MessagePublisher открывает отдельный канал на каждую публикацию:
  BlockingChannel не потокобезопасен, а вызовы идут из threadpool.
- Несколько попыток подключения с задержкой (только AMQPConnectionError);
  после последней ошибка пробрасывается. Ошибки канала не повторяются.

Использование:
    publisher = MessagePublisher(settings.AMQP_URL)
    publisher.publish_direct_message(
        "jobber-email-notification", "auth-email", json_payload,
        "Verify email message has been sent to notification service.",
    )
"""

import logging
import time
from typing import Optional

import pika
from pika.adapters.blocking_connection import BlockingChannel
from pika.exceptions import AMQPConnectionError
from pika.spec import BasicProperties

from app.infrastructure.queue.connection import close_connection, create_connection

log = logging.getLogger("auth.producer")


def publish_direct_message(
    channel: BlockingChannel,
    exchange_name: str,
    routing_key: str,
    message: str,
    log_message: str,
) -> None:
    """
    Публикует одно сообщение в exchange_name/routing_key на переданном канале.
    """
    channel.exchange_declare(exchange=exchange_name, exchange_type="direct", durable=True)
    channel.basic_publish(
        exchange=exchange_name,
        routing_key=routing_key,
        body=message.encode("utf-8"),
        properties=BasicProperties(
            delivery_mode=2,  # persistent
            content_type="application/json",
        ),
    )
    log.info(log_message)


class MessagePublisher:
    def __init__(
        self,
        amqp_url: str,
        *,
        retries: int = 3,
        retry_delay: float = 0.5,
    ) -> None:
        self.amqp_url = amqp_url
        self.retries = max(0, int(retries))
        self.retry_delay = max(0.0, float(retry_delay))

    def publish_direct_message(
        self,
        exchange_name: str,
        routing_key: str,
        message: str,
        log_message: str,
    ) -> None:
        for attempt in range(self.retries + 1):
            conn: Optional[pika.BlockingConnection] = None
            ch: Optional[BlockingChannel] = None
            try:
                conn, ch = create_connection(self.amqp_url)
                publish_direct_message(ch, exchange_name, routing_key, message, log_message)
                return
            except AMQPConnectionError as e:
                if attempt >= self.retries:
                    # исчерпали попытки
                    log.error("publish to %s/%s failed: %s", exchange_name, routing_key, e)
                    raise
                log.warning(
                    "publish to %s/%s failed (attempt %d/%d): %s",
                    exchange_name, routing_key, attempt + 1, self.retries + 1, e,
                )
                time.sleep(self.retry_delay)
            finally:
                close_connection(conn, ch)


__all__ = ["publish_direct_message", "MessagePublisher"]
