# app/core/utils/validator.py
from __future__ import annotations

import re
from typing import Final


class UserValidator:
    """
    Нормализация и простые проверки полей пользователя.

    Использование:
        username = UserValidator.first_letter_uppercase(username)  # "aLICE" -> "Alice"
        email = UserValidator.lower_case(email)
        UserValidator.is_email(email)
    """

    # Базовый e-mail шаблон (ASCII), совместимый с большинством форм.
    _EMAIL_RE: Final[re.Pattern[str]] = re.compile(
        r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$"
    )

    @staticmethod
    def first_letter_uppercase(value: str) -> str:
        """
        Первая буква заглавная, остальные строчные.
        """
        value = (value or "").lower()
        return f"{value[:1].upper()}{value[1:]}"

    @staticmethod
    def lower_case(value: str) -> str:
        return (value or "").lower()

    @staticmethod
    def is_email(value: str) -> bool:
        # без strip: адрес с пробелами невалиден, иначе поиск дублей и запись разойдутся
        return bool(UserValidator._EMAIL_RE.fullmatch(value or ""))
