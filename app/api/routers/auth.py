# app/api/routers/auth.py
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import Container, get_container
from app.domain.schemas.auth import AuthOut, AuthResponse
from app.domain.services import auth_actions
from app.infrastructure.db.database import get_db

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def create(
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db),
    container: Container = Depends(get_container),
) -> AuthResponse:
    """
    Регистрация пользователя:
      - тело (любое, в т.ч. пустое) проверяется вручную: 400 с первым сообщением, а не 422 FastAPI
      - 400, если username или email уже заняты
      - загрузка аватара, запись, письмо подтверждения в очередь, JWT
    """
    result = await auth_actions.create_user(db, payload, container)
    return AuthResponse(
        message="User created successfully",
        user=AuthOut.model_validate(result.user),
        token=result.token,
    )


@router.get("/refresh-token/{username}", response_model=AuthResponse)
async def token(
    username: str,
    db: AsyncSession = Depends(get_db),
    container: Container = Depends(get_container),
) -> AuthResponse:
    """
    Новый токен для существующего пользователя; 404, если такого нет.
    """
    result = await auth_actions.refresh_token(db, username, container)
    return AuthResponse(
        message="Refresh token",
        user=AuthOut.model_validate(result.user),
        token=result.token,
    )
