import logging
from datetime import timedelta
from types import SimpleNamespace
import uuid

from user_portal.core.security import (
    create_access_token,
    create_user_token,
    decode_token,
    hash_password,
    verify_password,
)
from user_portal.models.user import UserRole


def test_hash_and_verify():
    hashed = hash_password("correct horse")
    assert hashed != hash_password("correct horse")  # salted
    assert verify_password("correct horse", hashed)
    assert not verify_password("battery staple", hashed)


def test_malformed_hash_is_a_mismatch():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_user_token_round_trip():
    user = SimpleNamespace(id=uuid.uuid4(), email="eva@example.com", role=UserRole.HR)
    payload = decode_token(create_user_token(user))
    assert payload["sub"] == str(user.id)
    assert payload["email"] == "eva@example.com"
    assert payload["role"] == "HR"
    assert payload["exp"] > payload["iat"]


def test_expired_and_tampered_tokens_are_rejected():
    expired = create_access_token({"sub": "x"}, expires_delta=timedelta(seconds=-1))
    assert decode_token(expired) is None

    token = create_access_token({"sub": "x"})
    head, body, sig = token.split(".")
    tampered = ".".join([head, body, sig[:-2] + ("AA" if sig[-2:] != "AA" else "BB")])
    assert decode_token(tampered) is None
    assert decode_token("") is None


def test_overlong_password_is_a_plain_mismatch(caplog):
    hashed = hash_password("short")
    with caplog.at_level(logging.WARNING, logger="user_portal.core.security"):
        assert verify_password("y" * 100, hashed) is False
    assert "malformed" not in caplog.text
