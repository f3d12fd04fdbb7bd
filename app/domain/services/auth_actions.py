# app/domain/services/auth_actions.py
from __future__ import annotations

import secrets
import uuid
from dataclasses import dataclass
from typing import Any

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import Container
from app.core.errors import BadRequestError, NotFoundError
from app.core.security import sign_token
from app.core.utils.validator import UserValidator
from app.domain.schemas.auth import EmailMessageDetails, SignupIn
from app.domain.services.auth_service import (
    create_auth_user,
    get_user_by_username,
    get_user_by_username_or_email,
)
from app.infrastructure.db.models.auth import AuthUser

SIGNUP_ERROR = "SignUp create() method error"
REFRESH_ERROR = "RefreshToken token() method error"
DUPLICATE_USER = "Invalid credentials. Email or Username"
VERIFY_EMAIL_LOG = "Verify email message has been sent to notification service."


@dataclass
class AuthResult:
    user: AuthUser
    token: str


def _token_for(user: AuthUser, container: Container) -> str:
    s = container.settings
    return sign_token(
        user.id,
        user.email,
        user.username,
        secret_key=s.SECRET_KEY,
        algorithm=s.ALGORITHM,
        minutes=int(s.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def _first_message(e: ValidationError) -> str:
    err = e.errors()[0]
    if err["type"] == "extra_forbidden":
        return f'"{err["loc"][-1]}" is not allowed'
    return err["msg"]


def verification_link(client_url: str, token: str) -> str:
    return f"{client_url}/confirm_email?v_token={token}"


async def create_user(
    db: AsyncSession,
    payload: Any,
    container: Container,
) -> AuthResult:
    """
    Регистрация. Шаги строго последовательные, каждый зависит от предыдущего:
      валидация → проверка дублей → загрузка аватара → запись в БД
      → письмо подтверждения в очередь → токен.
    Ошибки не перехватываются (кроме перевода в BadRequestError),
    их обрабатывает общий обработчик приложения.
    Загруженный аватар не удаляется, если запись в БД не удалась.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be an object", SIGNUP_ERROR)
    try:
        data = SignupIn.model_validate(payload)
    except ValidationError as e:
        raise BadRequestError(_first_message(e), SIGNUP_ERROR) from e

    if await get_user_by_username_or_email(db, data.username, data.email):
        raise BadRequestError(DUPLICATE_USER, SIGNUP_ERROR)

    profile_public_id = str(uuid.uuid4())
    upload = await container.uploader.uploads(data.profile_picture, profile_public_id, True, True)
    if not upload.public_id:
        raise BadRequestError("File upload error. Try again", SIGNUP_ERROR)

    email_verification_token = secrets.token_hex(20)
    try:
        user = await create_auth_user(
            db,
            {
                "username": UserValidator.first_letter_uppercase(data.username),
                "email": UserValidator.lower_case(data.email),
                "password": data.password,
                "country": data.country,
                "profile_picture": upload.secure_url,
                "profile_public_id": profile_public_id,
                "email_verification_token": email_verification_token,
            },
        )
    except IntegrityError as e:
        # параллельная регистрация с тем же username/email
        raise BadRequestError(DUPLICATE_USER, SIGNUP_ERROR) from e

    s = container.settings
    message = EmailMessageDetails(
        receiver_email=user.email,
        verify_link=verification_link(s.CLIENT_URL, email_verification_token),
        template="verifyEmail",
    )
    await run_in_threadpool(
        container.publisher.publish_direct_message,
        s.EMAIL_EXCHANGE,
        s.EMAIL_ROUTING_KEY,
        message.to_json(),
        VERIFY_EMAIL_LOG,
    )

    return AuthResult(user=user, token=_token_for(user, container))


async def refresh_token(db: AsyncSession, username: str, container: Container) -> AuthResult:
    user = await get_user_by_username(db, username)
    if user is None:
        raise NotFoundError("User not found", REFRESH_ERROR)
    return AuthResult(user=user, token=_token_for(user, container))
