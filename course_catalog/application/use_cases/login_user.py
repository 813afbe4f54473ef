import structlog

from ...domain.entities import User
from ...domain.errors import InvalidCredentials

logger = structlog.get_logger()

class IUserRepository:
    def get_by_username(self, username: str) -> User | None: ...
    def get_by_id(self, user_id: str) -> User | None: ...

class IPasswordHasher:
    def verify(self, plain: str, stored: str) -> bool: ...

class ITokenIssuer:
    def issue(self, user: User) -> str: ...

class LoginUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher, tokens: ITokenIssuer):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    def execute(self, username: str, password: str) -> tuple[str, User]:
        user = self.repo.get_by_username(username)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.info("login_failed", username=username)
            raise InvalidCredentials()
        logger.info("login_succeeded", user_id=user.id, role=user.role)
        return self.tokens.issue(user), user
