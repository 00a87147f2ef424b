from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    redis_url: str = "redis://localhost:6379/0"
    store_prefix: str = "recipegen"
    history_limit: int = 50

    # AI
    ai_mode: str = "mock"  # "mock" or "live"
    gemini_api_key: Optional[str] = None
    gemini_text_model: str = "gemini-2.5-flash"
    gemini_vision_model: str = "gemini-2.5-flash"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-3.5-turbo"
    openai_vision_model: str = "gpt-4o"
    provider_timeout_sec: float = 20.0

    # Vision / nutrition lookups
    google_vision_api_key: Optional[str] = None
    vision_base_url: str = "https://vision.googleapis.com/v1"
    usda_api_key: Optional[str] = None
    usda_base_url: str = "https://api.nal.usda.gov/fdc/v1"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8081",
        "http://localhost",
    ]


settings = Settings()
