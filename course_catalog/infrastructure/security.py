import secrets
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext
from jose import jwt, JWTError

from ..config import settings
from ..domain.entities import Principal, User
from ..domain.errors import InvalidToken

pwd = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated="auto",
    bcrypt_sha256__truncate_error=False,
)

class PasswordHasher:
    def hash(self, plain: str) -> str: return pwd.hash(plain)

    def verify(self, plain: str, stored: str) -> bool:
        if not stored:
            return False
        if pwd.identify(stored, required=False) is not None:
            return pwd.verify(plain, stored)
        # сид-данные для разработки хранят пароль открытым текстом
        return secrets.compare_digest(plain.encode("utf-8"), stored.encode("utf-8"))


def create_access_token(sub: str, username: str, role: str, minutes: int | None = None) -> str:
    if minutes is None:
        minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    exp = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {"sub": str(sub), "username": username, "role": role, "exp": exp}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Principal:
    """Проверяет подпись и срок действия, возвращает Principal или кидает InvalidToken."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise InvalidToken() from e
    sub, username, role = payload.get("sub"), payload.get("username"), payload.get("role")
    if not sub or not username or not role:
        raise InvalidToken()
    return Principal(id=str(sub), username=username, role=role)


class TokenIssuer:
    def __init__(self, minutes: int | None = None): self.minutes = minutes

    def issue(self, user: User) -> str:
        return create_access_token(user.id, user.username, user.role, minutes=self.minutes)
