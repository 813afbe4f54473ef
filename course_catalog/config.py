from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATA_DIR: str = "./data"
    SECRET_KEY: str = "dev-secret"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days
    LOG_LEVEL: str = "INFO"
    LOGIN_RATE_LIMIT: str = "10/minute"
    RATE_LIMIT_ENABLED: bool = True
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "https://sstewart270.github.io",
    ]
    PORT: int = 5001

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
