from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):

    DATABASE_URL: str = "sqlite+aiosqlite:///./milkrun.db"
    CREATE_TABLES: bool = True

    JWT_ACCESS_SECRET: str = "dev-access-secret-change-me"
    JWT_REFRESH_SECRET: str = "dev-refresh-secret-change-me"
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    PASS_HASH_SCHEME: str = "pbkdf2_sha256"

    OTP_EXPIRY_MINUTES: int = 10
    OTP_MAX_ATTEMPTS: int = 5
    OTP_LENGTH: int = 6

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra="ignore"

config_settings = Settings()
