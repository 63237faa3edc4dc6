"""Configuration management using Pydantic Settings"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "sky-financial"
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Language model service
    llm_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    llm_api_key: str = ""
    llm_model: str = "gemini-2.5-flash"

    # HTTP Client
    http_timeout_seconds: float = 30.0
    llm_max_retries: int = 3
    llm_backoff_base: float = 0.5  # Exponential backoff base in seconds

    # Chat sessions kept in memory; oldest evicted beyond this
    chat_max_sessions: int = 1000


settings = Settings()
