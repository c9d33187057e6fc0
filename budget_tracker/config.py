from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./budget.db"

    # JWT
    ACCESS_TOKEN_SECRET: str = "access_secret_change_this"
    REFRESH_TOKEN_SECRET: str = "refresh_secret_change_this"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 15 * 60
    REFRESH_TOKEN_EXPIRE_SECONDS: int = 24 * 60 * 60

    # Refresh cookie
    COOKIE_NAME: str = "jwt"
    COOKIE_SECURE: bool = False
    COOKIE_SAMESITE: str = "lax"

    # CORS (credentials are allowed, so origins must be explicit)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Logging
    LOG_FILE: str = "app.log"
    LOG_LEVEL: str = "DEBUG"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 5000

    class Config:
        env_file = ".env"


def get_settings() -> Settings:
    return Settings()
