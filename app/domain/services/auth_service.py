# app/domain/services/auth_service.py
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils.validator import UserValidator
from app.infrastructure.db.models.auth import AuthUser


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[AuthUser]:
    res = await db.execute(
        select(AuthUser).where(AuthUser.username == UserValidator.first_letter_uppercase(username))
    )
    return res.scalar_one_or_none()


async def get_user_by_username_or_email(
    db: AsyncSession,
    username: str,
    email: str,
) -> Optional[AuthUser]:
    res = await db.execute(
        select(AuthUser).where(
            or_(
                AuthUser.username == UserValidator.first_letter_uppercase(username),
                AuthUser.email == UserValidator.lower_case(email),
            )
        )
    )
    # username и email уникальны по отдельности, совпасть могут две разные записи
    return res.scalars().first()


async def create_auth_user(db: AsyncSession, data: Dict[str, Any]) -> AuthUser:
    """
    Создаёт пользователя: пароль хэшируется здесь, вызывающему не нужно.
    IntegrityError (гонка за уникальный username/email) пробрасывается после rollback.
    """
    fields = dict(data)
    user = AuthUser.create_instance(password=fields.pop("password"), **fields)
    db.add(user)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(user)
    return user
