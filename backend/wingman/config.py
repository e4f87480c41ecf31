from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # OpenRouter
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_timeout: float = 60.0
    default_model: str = "mistralai/mistral-7b-instruct"
    http_referer: str = "https://wingman-ai.vercel.app"
    app_title: str = "Wingman AI"

    # History cookies
    history_cookie_prefix: str = "chat-history-"
    history_retention_days: int = 30

    # App
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    @property
    def completions_url(self) -> str:
        return f"{self.openrouter_base_url.rstrip('/')}/chat/completions"

    class Config:
        env_prefix = "WINGMAN_"
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
