# app/domain/schemas/auth.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core.utils.validator import UserValidator


def _required_string(value: Any, *, type_msg: str, empty_msg: str) -> str:
    if value is None:
        raise PydanticCustomError("required", empty_msg)
    if not isinstance(value, str):
        raise PydanticCustomError("string_type", type_msg)
    if not value:
        raise PydanticCustomError("required", empty_msg)
    return value


class SignupIn(BaseModel):
    """
    Тело POST /signup. Порядок полей = порядок проверки:
    клиенту уходит первое сообщение об ошибке. Лишние ключи запрещены.
    """
    username: str = Field(default=None, validate_default=True)
    password: str = Field(default=None, validate_default=True)
    country: str = Field(default=None, validate_default=True)
    email: str = Field(default=None, validate_default=True)
    profile_picture: str = Field(default=None, validate_default=True)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    @field_validator("username", mode="before")
    @classmethod
    def _username(cls, v: Any) -> str:
        v = _required_string(v, type_msg="Username must be of type string",
                             empty_msg="Username is a required field")
        if not 4 <= len(v) <= 12:
            raise PydanticCustomError("length", "Invalid username")
        return v

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v: Any) -> str:
        v = _required_string(v, type_msg="Password must be of type string",
                             empty_msg="Password is a required field")
        if not 4 <= len(v) <= 12:
            raise PydanticCustomError("length", "Invalid password")
        return v

    @field_validator("country", mode="before")
    @classmethod
    def _country(cls, v: Any) -> str:
        return _required_string(v, type_msg="Country must be of type string",
                                empty_msg="Country is a required field")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v: Any) -> str:
        v = _required_string(v, type_msg="Email must be of type string",
                             empty_msg="Email is a required field")
        if not UserValidator.is_email(v):
            raise PydanticCustomError("email", "Invalid email")
        return v

    @field_validator("profile_picture", mode="before")
    @classmethod
    def _profile_picture(cls, v: Any) -> str:
        return _required_string(v, type_msg="Please add a profile picture",
                                empty_msg="Profile picture is required")


class AuthOut(BaseModel):
    """
    Пользователь в ответах API (без пароля), поля в camelCase.
    """
    id: int
    username: str
    email: str
    country: str
    profile_picture: str
    profile_public_id: str
    email_verification_token: Optional[str] = None
    email_verified: bool = False
    created_at: Optional[datetime] = None

    # позволяет возвращать ORM-объекты напрямую
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class AuthResponse(BaseModel):
    message: str
    user: AuthOut
    token: str


class EmailMessageDetails(BaseModel):
    """
    Сообщение для notification-сервиса; в БД не сохраняется.
    """
    receiver_email: str
    verify_link: str
    template: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
