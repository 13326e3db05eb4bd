from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Bidforge"
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = 8787
    log_level: str = "INFO"

    database_url: str = "sqlite:///./data/bidforge.db"
    data_dir: Path = Path("./data")
    resume_dir: Path = Path("./data/resumes")

    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_timeout_sec: int = 60

    resume_model: str = "gpt-4o-mini"
    resume_temperature: float = 0.7
    resume_max_tokens: int = 2000

    cover_letter_model: str = "gpt-5-mini"
    cover_letter_temperature: float = 0.7
    cover_letter_max_tokens: int = 1500
    cover_letter_token_param: str = "max_completion_tokens"

    answer_model: str = "gpt-4o-mini"
    answer_temperature: float = 0.7
    answer_max_tokens: int = 1000

    job_info_model: str = "gpt-4o"
    job_info_temperature: float = 0.3
    job_info_max_tokens: int = 200

    job_fetch_timeout_sec: int = 30

    api_user_header: str = "X-User-Id"
    cors_origins: str = "http://127.0.0.1:8787"

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("cover_letter_token_param")
    @classmethod
    def validate_token_param(cls, value: str) -> str:
        allowed = {"max_tokens", "max_completion_tokens"}
        if value not in allowed:
            raise ValueError(f"cover_letter_token_param must be one of {sorted(allowed)}")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
