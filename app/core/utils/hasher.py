# app/core/utils/hasher.py
from __future__ import annotations

"""
Лёгкая обёртка над bcrypt.

Сложность (cost/rounds) настраивается через env BCRYPT_ROUNDS (по умолчанию: 10).
"""

import os
from typing import Optional

import bcrypt


def _get_rounds(default: int = 10) -> int:
    try:
        return max(4, min(31, int(os.getenv("BCRYPT_ROUNDS", default))))
    except ValueError:
        return default


class PasswordHasher:
    @staticmethod
    def hash(password: str, *, rounds: Optional[int] = None) -> str:
        """
        Хэширует пароль с использованием bcrypt.
        :param password: исходный пароль (unicode строка)
        :param rounds: cost, 4..31. Если не задан, берётся из env.
        :return: bcrypt-хэш в виде строки utf-8
        """
        if not isinstance(password, str) or not password:
            raise ValueError("password must be a non-empty string")

        cost = _get_rounds() if rounds is None else max(4, min(31, int(rounds)))
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost))
        return hashed.decode("utf-8")

    @staticmethod
    def check(password: str, hashed: str) -> bool:
        """
        Проверяет пароль против bcrypt-хэша.
        Возвращает False при несовпадении или битом формате хэша.
        """
        if not isinstance(password, str) or not isinstance(hashed, str):
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False
