# app/infrastructure/db/init_db.py
from __future__ import annotations

import logging
from typing import Optional

from app.core.settings import get_settings
from app.infrastructure.db.database import Base, engine

settings = get_settings()
log = logging.getLogger("auth.db")


def _import_models() -> None:
    """
    Форсируем импорт всех моделей перед созданием схемы,
    чтобы таблицы попали в Base.metadata.
    """
    from app.infrastructure.db.models import auth as _auth  # noqa: F401


async def init(drop_all: Optional[bool] = None) -> None:
    """
    Инициализация БД:
      1) Импорт моделей
      2) Создание/пересоздание схемы (по флагам)
    """
    if drop_all is None:
        drop_all = bool(settings.INIT_DB_DROP_ALL)

    _import_models()
    async with engine.begin() as conn:
        if drop_all:
            log.warning("DROP ALL ...")
            await conn.run_sync(Base.metadata.drop_all)
        log.info("CREATE ALL ...")
        await conn.run_sync(Base.metadata.create_all)
