import pytest

from app.core.utils.hasher import PasswordHasher
from app.core.utils.validator import UserValidator


@pytest.mark.parametrize(
    "raw, expected",
    [("alice", "Alice"), ("aLICE", "Alice"), ("A", "A"), ("", "")],
)
def test_first_letter_uppercase(raw, expected):
    assert UserValidator.first_letter_uppercase(raw) == expected


def test_lower_case():
    assert UserValidator.lower_case("Bob@Example.com") == "bob@example.com"


@pytest.mark.parametrize(
    "email, ok",
    [("bob@example.com", True), ("bob@", False), ("bob", False),
     (" bob@example.com", False), ("bob@example.com\n", False)],
)
def test_is_email(email, ok):
    assert UserValidator.is_email(email) is ok


def test_hasher_check():
    hashed = PasswordHasher.hash("qwerty", rounds=4)
    assert hashed != "qwerty"
    assert PasswordHasher.check("qwerty", hashed)
    assert not PasswordHasher.check("wrong", hashed)
    assert not PasswordHasher.check("qwerty", "not-a-hash")
