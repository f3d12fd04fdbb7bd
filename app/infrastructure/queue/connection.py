# app/infrastructure/queue/connection.py
from __future__ import annotations

import logging
from typing import Optional

import pika
from pika.adapters.blocking_connection import BlockingChannel

log = logging.getLogger("auth.queue")


def create_connection(amqp_url: str) -> tuple[pika.BlockingConnection, BlockingChannel]:
    """
    Создаёт соединение и канал. Закрывает вызывающая сторона (close_connection).
    """
    conn = pika.BlockingConnection(pika.URLParameters(amqp_url))
    ch = conn.channel()
    log.debug("connected to queue %s", conn)
    return conn, ch


def close_connection(
    connection: Optional[pika.BlockingConnection],
    channel: Optional[BlockingChannel],
) -> None:
    # ошибки закрытия только логируем
    try:
        if channel is not None and channel.is_open:
            channel.close()
    except Exception as e:
        log.warning("failed to close channel: %s", e)
    try:
        if connection is not None and connection.is_open:
            connection.close()
    except Exception as e:
        log.warning("failed to close connection: %s", e)
