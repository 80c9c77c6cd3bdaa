from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "dev"                # "dev" / "staging" / "prod"
    ENABLE_ADMIN: bool = True      # mounts /admin routes
    SERVICE_NAME: str = "milkrun"

    class Config:
        env_file = ".env"
        extra="ignore"

admin_config = Settings()
