class DomainError(Exception):
    """Базовая ошибка предметной области, переводится в HTTP-ответ на границе."""

    default_detail = "Bad request"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(DomainError):
    default_detail = "Invalid payload"


class InvalidCredentials(DomainError):
    default_detail = "Invalid credentials"


class MissingToken(DomainError):
    default_detail = "Missing token"


class InvalidToken(DomainError):
    default_detail = "Invalid token"


class Forbidden(DomainError):
    default_detail = "Forbidden"


class NotFound(DomainError):
    default_detail = "Not found"


class CorruptStoreError(RuntimeError):
    """Файл хранилища существует, но не разбирается как ожидаемый JSON."""

    def __init__(self, collection: str, reason: str):
        self.collection = collection
        super().__init__(f"{collection}: {reason}")
