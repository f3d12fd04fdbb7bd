# app/infrastructure/db/models/auth.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from app.core.utils.hasher import PasswordHasher
from app.infrastructure.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthUser(Base):
    """
    Учётная запись сервиса авторизации.
    - username и email уникальны
    - email хранится в нижнем регистре
    - password хранится как bcrypt-хэш (см. create_instance)
    """
    __tablename__ = "auths"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    password: Mapped[str] = mapped_column(String, nullable=False)
    country: Mapped[str] = mapped_column(String, nullable=False)

    profile_picture: Mapped[str] = mapped_column(String, nullable=False)
    profile_public_id: Mapped[str] = mapped_column(String, nullable=False)

    email_verification_token: Mapped[Optional[str]] = mapped_column(String, unique=True, nullable=True)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    password_reset_token: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    password_reset_expires: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # -------------------- Factory --------------------

    @classmethod
    def create_instance(cls, *, password: str, **fields) -> "AuthUser":
        """
        Создаёт запись с уже захэшированным паролем.
        """
        return cls(password=PasswordHasher.hash(password), **fields)

    def check_password(self, password: str) -> bool:
        return PasswordHasher.check(password, self.password)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        return (value or "").strip().lower()

    def __repr__(self) -> str:  # pragma: no cover - для отладки
        return f"<AuthUser id={self.id!s} username={self.username!r} email={self.email!r}>"
