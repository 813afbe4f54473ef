import pytest
from jose import jwt

from course_catalog.config import settings
from course_catalog.domain.entities import Principal, User
from course_catalog.domain.errors import Forbidden, InvalidToken
from course_catalog.infrastructure.security import (
    PasswordHasher, TokenIssuer, create_access_token, decode_token, pwd,
)


def test_hash_and_verify(teacher1_hash):
    hasher = PasswordHasher()
    assert hasher.verify("password", teacher1_hash)
    assert not hasher.verify("wrong", teacher1_hash)


def test_verify_plain_bcrypt_hash():
    """Классический $2b$ bcrypt тоже распознаётся как хэш"""
    hashed = pwd.handler("bcrypt").hash("secret")
    assert hashed.startswith("$2")
    assert PasswordHasher().verify("secret", hashed)
    assert not PasswordHasher().verify(hashed, hashed)


def test_verify_plaintext_fallback():
    """Значение, не похожее на хэш, сравнивается как открытый текст"""
    hasher = PasswordHasher()
    assert hasher.verify("password", "password")
    assert not hasher.verify("Password", "password")


def test_verify_empty_stored_never_matches():
    assert not PasswordHasher().verify("", "")
    assert not PasswordHasher().verify("password", "")


def test_token_round_trip():
    token = create_access_token("u1", "teacher1", "teacher")
    assert decode_token(token) == Principal(id="u1", username="teacher1", role="teacher")


def test_token_issuer_uses_user_fields():
    token = TokenIssuer().issue(User(id="u3", username="student1", role="student"))
    claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert claims["sub"] == "u3"
    assert claims["username"] == "student1"
    assert claims["role"] == "student"
    assert "exp" in claims


def test_expired_token():
    token = create_access_token("u1", "teacher1", "teacher", minutes=-5)
    with pytest.raises(InvalidToken):
        decode_token(token)


def test_tampered_token():
    token = create_access_token("u3", "student1", "student")
    forged = jwt.encode(
        {"sub": "u3", "username": "student1", "role": "teacher"}, "other-secret", algorithm="HS256"
    )
    with pytest.raises(InvalidToken):
        decode_token(forged)
    # подпись от одного payload, данные от другого
    header, _, signature = token.split(".")
    _, forged_body, _ = forged.split(".")
    with pytest.raises(InvalidToken):
        decode_token(f"{header}.{forged_body}.{signature}")
    with pytest.raises(InvalidToken):
        decode_token("not-a-token")


def test_token_without_role_is_invalid():
    token = jwt.encode({"sub": "u1", "username": "teacher1"}, settings.SECRET_KEY,
                       algorithm=settings.JWT_ALGORITHM)
    with pytest.raises(InvalidToken):
        decode_token(token)


def test_require_role():
    teacher = Principal(id="u1", username="teacher1", role="teacher")
    assert teacher.require_role("teacher") is teacher
    with pytest.raises(Forbidden):
        Principal(id="u3", username="student1", role="student").require_role("teacher")
