import os
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: Optional[str] = Field(None, alias="ESSAY_DATABASE_URL")
    database_pool_size: int = Field(10, alias="ESSAY_DATABASE_POOL_SIZE")
    database_max_overflow: int = Field(10, alias="ESSAY_DATABASE_MAX_OVERFLOW")
    database_echo: bool = Field(False, alias="ESSAY_DATABASE_ECHO")
    cors_allowed_origins: str = Field(
        "http://localhost:3000,http://localhost:3001,http://localhost:3002",
        alias="ESSAY_CORS_ALLOWED_ORIGINS",
    )
    environment: Literal["development", "staging", "production", "test"] = Field(
        "development",
        alias="ESSAY_ENVIRONMENT",
    )
    result_ttl_days: int = Field(30, ge=1, alias="ESSAY_RESULT_TTL_DAYS")
    submission_timeout_seconds: float = Field(30.0, gt=0, alias="ESSAY_SUBMISSION_TIMEOUT_SECONDS")
    seed_on_startup: bool = Field(True, alias="ESSAY_SEED_ON_STARTUP")
    auto_create_schema: bool = Field(False, alias="ESSAY_AUTO_CREATE_SCHEMA")

    class Config:
        env_file = os.getenv("ENV_FILE", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        raise RuntimeError(f"Invalid backend configuration: {exc}") from exc
