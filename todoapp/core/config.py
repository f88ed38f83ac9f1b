# todoapp/core/config.py
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_version: str = Field("0.1.0", alias="APP_VERSION")

    # users: per-user lists behind sign-in / single: one shared list, no sign-in
    auth_mode: Literal["users", "single"] = Field("users", alias="AUTH_MODE")

    # JWT
    jwt_secret_key: str = Field("todo-secret-key", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(720, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Cookie
    access_cookie_name: str = Field("access_token", alias="ACCESS_COOKIE_NAME")
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")

    cors_allow_origins: str = Field(
        "http://localhost:3000,http://localhost:8000", alias="CORS_ALLOW_ORIGINS"
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # in-memory todo stores: reload after this much idle time, cap on live stores
    store_idle_seconds: float = Field(300.0, alias="STORE_IDLE_SECONDS")
    store_max_entries: int = Field(1000, alias="STORE_MAX_ENTRIES")

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def single_user(self) -> bool:
        return self.auth_mode == "single"

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


settings = Settings()
